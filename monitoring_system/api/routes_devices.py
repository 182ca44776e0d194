# /devices routes
import logging
import re
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from monitoring_system.core.device_registry import Device, DuplicateDeviceError

logger = logging.getLogger("monitoringsystem.api")

_DEVICE_ID = re.compile(r"\+?[0-9]+")


class DeviceIn(BaseModel):
    model_config = ConfigDict(strict=True)

    id: int = Field(..., ge=1)
    mac: str
    firmware: str


class FirmwareUpgrade(BaseModel):
    model_config = ConfigDict(strict=True)

    # id/mac may be echoed back by clients; only firmware is used
    id: Optional[int] = None
    mac: Optional[str] = None
    firmware: str


router = APIRouter()


async def _decode(request: Request, model):
    raw = await request.body()
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("rejected %s %s: %s", request.method, request.url.path, e)
        raise HTTPException(status_code=400, detail=str(e))


def _parse_device_id(raw: str) -> int:
    # plain ASCII digits only; int() would also take "1_0", " 1 " or other scripts
    if not _DEVICE_ID.fullmatch(raw):
        raise HTTPException(status_code=404)
    device_id = int(raw)
    if device_id < 1:
        raise HTTPException(status_code=404)
    return device_id


def _allowed_methods(path: str) -> Optional[str]:
    if path == "/devices":
        return "GET, POST"
    if path.startswith("/devices/"):
        return "PUT"
    return None


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Give every 405 on the device routes the full Allow list.

    The router only reports the methods of the first route matching the
    path, so /devices would otherwise advertise just GET.
    """
    allow = _allowed_methods(request.url.path) if exc.status_code == 405 else None
    if allow is None:
        return await http_exception_handler(request, exc)
    return JSONResponse({"detail": "Method not allowed"}, status_code=405, headers={"Allow": allow})


@router.get("/devices")
def list_devices(request: Request):
    devices = request.app.state.devices
    try:
        return JSONResponse([d.to_dict() for d in devices.list()])
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/devices", status_code=201)
async def create_device(request: Request):
    body = await _decode(request, DeviceIn)
    devices = request.app.state.devices
    try:
        devices.append(Device(id=body.id, mac=body.mac, firmware=body.firmware))
    except DuplicateDeviceError as e:
        logger.warning("rejected create: %s", e)
        raise HTTPException(status_code=409, detail=str(e))
    logger.info("device %s created (mac=%s firmware=%s)", body.id, body.mac, body.firmware)
    return PlainTextResponse("Device created", status_code=201)


@router.put("/devices/{device_id}", status_code=202)
async def upgrade_device(device_id: str, request: Request):
    # invalid id ends the request before the body is touched
    did = _parse_device_id(device_id)
    body = await _decode(request, FirmwareUpgrade)
    updated = request.app.state.devices.update_firmware(did, body.firmware)
    logger.info("firmware upgrade for device %s to %s (%d matched)", did, body.firmware, updated)
    return PlainTextResponse("Device upgrading...", status_code=202)
