from dataclasses import dataclass, asdict, replace
import logging
import threading
from typing import Dict, Iterable, List, Optional, Any

logger = logging.getLogger("monitoringsystem.registry")


@dataclass
class Device:
    id: int
    mac: str
    firmware: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DuplicateDeviceError(ValueError):
    def __init__(self, device_id: int):
        super().__init__(f"device with id {device_id} already exists")
        self.device_id = device_id


def seed_devices() -> List[Device]:
    return [
        Device(id=1, mac="65:D0:E8:1A:26:EA", firmware="2.1.6"),
        Device(id=2, mac="65:D0:E9:2A:44:EB", firmware="1.1.2"),
    ]


class DeviceRegistry:
    """Thread-safe, insertion-ordered store of Device records.

    Every read and mutation runs under one lock. When a metrics sink is
    attached, the gauge/counter update happens inside the same critical
    section as the mutation, so a scrape never sees a count that disagrees
    with the list.
    """

    def __init__(self, devices: Optional[Iterable[Device]] = None, metrics=None):
        self._lock = threading.RLock()
        self._devices: List[Device] = []
        self._metrics = metrics
        for d in devices or []:
            self.append(d)
        if self._metrics is not None:
            self._metrics.set_connected_devices(len(self._devices))

    def __len__(self) -> int:
        with self._lock:
            return len(self._devices)

    def list(self) -> List[Device]:
        with self._lock:
            return [replace(d) for d in self._devices]

    def get(self, device_id: int) -> Optional[Device]:
        with self._lock:
            for d in self._devices:
                if d.id == device_id:
                    return replace(d)
        return None

    def append(self, device: Device):
        with self._lock:
            if any(d.id == device.id for d in self._devices):
                raise DuplicateDeviceError(device.id)
            self._devices.append(replace(device))
            if self._metrics is not None:
                self._metrics.set_connected_devices(len(self._devices))

    def update_firmware(self, device_id: int, firmware: str, kind: str = "router") -> int:
        """Overwrite firmware on every record with this id.

        Returns the number of records touched; 0 is not an error. The upgrade
        counter is bumped once per call regardless of matches.
        """
        with self._lock:
            updated = 0
            for d in self._devices:
                if d.id == device_id:
                    d.firmware = firmware
                    updated += 1
            if self._metrics is not None:
                self._metrics.increment_upgrades(kind)
            return updated
