from fastapi import APIRouter, Request
import time

from monitoring_system import config

router = APIRouter()


@router.get('/health')
def health(request: Request):
    devices = getattr(request.app.state, 'devices', None)
    return {
        'ts_ms': int(time.time() * 1000),
        'version': config.VERSION,
        'devices': len(devices) if devices is not None else None,
    }
