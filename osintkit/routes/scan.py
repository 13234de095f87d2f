"""Scan and classification endpoints."""

from fastapi import APIRouter, HTTPException, Query, Request

from osintkit.models import ClassifyResponse, ErrorResponse, ScanRequest
from osintkit.osint import ScanOrchestrator, TargetValidationError, classify

router = APIRouter(tags=["Scan"])


@router.post("/scan")
async def scan(body: ScanRequest, request: Request):
    """
    Run a scan and return the report with camelCase keys.

    ``input_type`` is detected from the target when omitted.
    """
    input_type = body.input_type or classify(body.target)
    if input_type is None:
        raise HTTPException(
            status_code=400,
            detail=ErrorResponse(error="Unrecognized target format").model_dump(),
        )

    state = request.app.state
    orchestrator = ScanOrchestrator(
        cache=state.cache,
        rate_limiter=state.rate_limiter,
        config=state.settings,
    )

    try:
        result = await orchestrator.scan(body.target, input_type, body.depth)
    except TargetValidationError as e:
        raise HTTPException(status_code=400, detail=ErrorResponse(error=str(e)).model_dump())

    return result.model_dump(mode="json", by_alias=True)


@router.get("/classify", response_model=ClassifyResponse)
async def classify_target(target: str = Query(..., min_length=1, max_length=320)):
    detected = classify(target)
    return ClassifyResponse(
        target=target.strip(),
        input_type=detected.value if detected else None,
        valid=detected is not None,
    )
