from fastapi import APIRouter, Request
from datetime import datetime, timezone
from osintkit.models import HealthResponse
from osintkit.config import SOURCE_NAMES

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    settings = request.app.state.settings
    return HealthResponse(
        status="ok",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc),
        real_apis_enabled=settings.ENABLE_REAL_APIS,
        caching_enabled=settings.ENABLE_CACHING,
        sources={
            name.lower(): bool(settings.source(name).credential)
            for name in SOURCE_NAMES
        },
    )
