from fastapi import APIRouter, Depends

from advert_api.api.dependencies import get_advert_store, get_message_sink
from advert_api.api.schemas.advert_schemas import HealthResponse
from advert_api.application.interfaces.message_sink import MessageSink
from advert_api.application.services.advert_store import AdvertStore

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: AdvertStore = Depends(get_advert_store),
    sink: MessageSink = Depends(get_message_sink),
) -> HealthResponse:
    """Liveness + dependency health check."""
    store_status = "connected" if await store.check_health() else "error"
    sink_status = "connected" if await sink.check_health() else "error"

    overall = "healthy" if store_status == sink_status == "connected" else "degraded"
    return HealthResponse(status=overall, document_store=store_status, message_sink=sink_status)
