from fastapi import APIRouter

from . import routes_devices, routes_health

# management listener; /metrics is mounted separately on its own app
router = APIRouter()

router.include_router(routes_devices.router)
router.include_router(routes_health.router)
