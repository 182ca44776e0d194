import os
import threading
import logging

import uvicorn
from fastapi import FastAPI
from prometheus_client import CollectorRegistry
from starlette.exceptions import HTTPException as StarletteHTTPException

from monitoring_system import config
from monitoring_system.api import router as api_router
from monitoring_system.api import routes_devices, routes_metrics
from monitoring_system.core.device_registry import DeviceRegistry, seed_devices
from monitoring_system.core.metrics import MetricsSink

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("monitoringsystem.app")


def create_api_app(devices: DeviceRegistry) -> FastAPI:
    app = FastAPI(title="Monitoring System API")
    app.include_router(api_router)
    app.add_exception_handler(StarletteHTTPException, routes_devices.method_not_allowed_handler)
    app.state.devices = devices
    return app


def create_metrics_app(metrics: MetricsSink) -> FastAPI:
    app = FastAPI(title="Monitoring System metrics", docs_url=None, redoc_url=None, openapi_url=None)
    app.include_router(routes_metrics.router)
    app.state.metrics = metrics
    return app


# process-wide singletons
metrics = MetricsSink(CollectorRegistry())
metrics.set_info(config.VERSION)
devices = DeviceRegistry(seed_devices(), metrics=metrics)

app = create_api_app(devices)
metrics_app = create_metrics_app(metrics)


def _server(asgi_app, port: int) -> uvicorn.Server:
    return uvicorn.Server(uvicorn.Config(asgi_app, host=config.HOST, port=port, log_level=config.LOG_LEVEL.lower()))


def _serve_background(server: uvicorn.Server):
    try:
        server.run()
    finally:
        # a listener that never came up (e.g. port in use) takes the process down
        if not server.started:
            logger.critical("Metrics listener failed to start")
            os._exit(1)


def run():
    logger.info("Starting metrics listener on %s:%d", config.HOST, config.METRICS_PORT)
    metrics_server = _server(metrics_app, config.METRICS_PORT)
    thread = threading.Thread(target=_serve_background, args=(metrics_server,), daemon=True, name="metrics-listener")
    thread.start()

    logger.info("Starting management listener on %s:%d", config.HOST, config.API_PORT)
    try:
        _server(app, config.API_PORT).run()
    finally:
        metrics_server.should_exit = True


if __name__ == "__main__":
    run()
