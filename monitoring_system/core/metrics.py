from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

NAMESPACE = "monitoringsystem"


class MetricsSink:
    """Process-wide instruments mirroring the device registry.

    All three are registered on construction; building a second sink on the
    same CollectorRegistry raises ValueError (duplicated timeseries).
    """

    def __init__(self, registry: CollectorRegistry):
        self.registry = registry
        self.devices = Gauge(
            "connected_devices",
            "Number of connected devices",
            namespace=NAMESPACE,
            registry=registry,
        )
        self.info = Gauge(
            "info",
            "Info about the environment",
            ["version"],
            namespace=NAMESPACE,
            registry=registry,
        )
        self.upgrades = Counter(
            "upgrades",
            "Number of upgrades",
            ["type"],
            namespace=NAMESPACE,
            registry=registry,
        )

    def set_connected_devices(self, n: int):
        self.devices.set(n)

    def set_info(self, version: str):
        self.info.labels(version=version).set(1)

    def increment_upgrades(self, kind: str):
        self.upgrades.labels(type=kind).inc()

    def render(self) -> bytes:
        return generate_latest(self.registry)
