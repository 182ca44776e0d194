import pytest
from prometheus_client import CollectorRegistry

from monitoring_system.core.metrics import MetricsSink


def test_instruments_registered():
    reg = CollectorRegistry()
    m = MetricsSink(reg)
    m.set_connected_devices(5)
    m.set_info("2.0.0")
    m.increment_upgrades("router")
    m.increment_upgrades("router")
    assert reg.get_sample_value("monitoringsystem_connected_devices") == 5.0
    assert reg.get_sample_value("monitoringsystem_info", {"version": "2.0.0"}) == 1.0
    assert reg.get_sample_value("monitoringsystem_upgrades_total", {"type": "router"}) == 2.0


def test_second_sink_on_same_registry_fails():
    reg = CollectorRegistry()
    MetricsSink(reg)
    with pytest.raises(ValueError):
        MetricsSink(reg)


def test_set_connected_devices_is_idempotent():
    reg = CollectorRegistry()
    m = MetricsSink(reg)
    m.set_connected_devices(3)
    m.set_connected_devices(3)
    assert reg.get_sample_value("monitoringsystem_connected_devices") == 3.0


def test_render_exposition():
    m = MetricsSink(CollectorRegistry())
    m.set_info("1.0.0")
    text = m.render().decode()
    assert '# TYPE monitoringsystem_connected_devices gauge' in text
    assert 'monitoringsystem_info{version="1.0.0"} 1.0' in text
