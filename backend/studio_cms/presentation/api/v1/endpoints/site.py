"""Public site endpoints — landing content, forms and live streams."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from studio_cms.application.schemas import (
    ContactCreate,
    FooterResponse,
    ReviewCreate,
    SubmissionResponse,
)
from studio_cms.application.services import LandingService, SSEManager, SubmissionService
from studio_cms.application.services.sse_manager import PUBLIC_STREAM_PATHS
from studio_cms.domain.exceptions import CooldownActiveError, StoreWriteError
from studio_cms.domain.paths import join_path
from studio_cms.infrastructure.dependencies import (
    get_client_id,
    get_landing_service,
    get_sse_manager,
    get_submission_service,
)
from studio_cms.presentation.api.v1.endpoints.admin_footer import footer_response
from studio_cms.presentation.api.v1.endpoints.errors import save_failed

router = APIRouter(prefix="/site", tags=["Site"])


@router.get("/features")
async def get_features(service: LandingService = Depends(get_landing_service)) -> list[dict]:
    return await service.features()


@router.get("/services")
async def get_services(service: LandingService = Depends(get_landing_service)) -> list[dict]:
    return await service.services()


@router.get("/portfolio")
async def get_portfolio(service: LandingService = Depends(get_landing_service)) -> dict:
    """Top graphics and videos, with Drive links resolved to embeddable URLs."""
    return await service.portfolio()


@router.get("/pricing")
async def get_pricing(service: LandingService = Depends(get_landing_service)) -> dict:
    return await service.pricing()


@router.get("/reviews")
async def get_reviews(service: LandingService = Depends(get_landing_service)) -> list[dict]:
    """A random sample of reviews."""
    return await service.reviews()


@router.get("/footer", response_model=FooterResponse)
async def get_footer(service: LandingService = Depends(get_landing_service)) -> FooterResponse:
    return footer_response(await service.footer())


@router.post("/contact", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    data: ContactCreate,
    client_id: str = Depends(get_client_id),
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionResponse:
    try:
        key = await service.submit_contact(client_id, data)
    except CooldownActiveError as e:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(e),
            headers={"Retry-After": str(int(e.retry_after) + 1)},
        )
    except StoreWriteError:
        raise save_failed()
    return SubmissionResponse(id=key, message="Thank you! We'll get back to you soon.")


@router.post("/reviews", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_review(
    data: ReviewCreate,
    client_id: str = Depends(get_client_id),
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionResponse:
    try:
        key = await service.submit_review(client_id, data)
    except CooldownActiveError as e:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(e),
            headers={"Retry-After": str(int(e.retry_after) + 1)},
        )
    except StoreWriteError:
        raise save_failed()
    return SubmissionResponse(id=key, message="Thank you for your review!")


@router.get("/stream/{path:path}")
async def stream_content(
    path: str,
    sse: SSEManager = Depends(get_sse_manager),
) -> StreamingResponse:
    """SSE endpoint for live snapshots of one public content path.

    Clients connect via EventSource and receive a 'snapshot' event on
    connect and after every change below the path.
    """
    normalized = join_path(path)
    if normalized not in PUBLIC_STREAM_PATHS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No stream for '{path}'")
    return StreamingResponse(
        sse.subscribe(normalized),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
