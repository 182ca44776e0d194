import pytest
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from monitoring_system.core.device_registry import DeviceRegistry, seed_devices
from monitoring_system.core.metrics import MetricsSink
from monitoring_system.main import create_api_app, create_metrics_app


@pytest.fixture
def sink():
    m = MetricsSink(CollectorRegistry())
    m.set_info("1.0.0")
    return m


@pytest.fixture
def registry(sink):
    return DeviceRegistry(seed_devices(), metrics=sink)


@pytest.fixture
def client(registry):
    return TestClient(create_api_app(registry))


@pytest.fixture
def metrics_client(sink, registry):
    return TestClient(create_metrics_app(sink))
