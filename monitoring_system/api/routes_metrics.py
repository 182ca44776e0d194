from fastapi import APIRouter, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

router = APIRouter()


@router.get("/metrics")
def metrics(request: Request):
    """Text exposition of the sink's registry, for the Prometheus scraper."""
    return Response(request.app.state.metrics.render(), media_type=CONTENT_TYPE_LATEST)
