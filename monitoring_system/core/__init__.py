"""Device registry and metrics sink"""
from .device_registry import Device, DeviceRegistry, DuplicateDeviceError, seed_devices
from .metrics import MetricsSink
