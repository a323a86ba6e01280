"""Admin footer editor endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from studio_cms.application.schemas import (
    CreatedResponse,
    FooterEntryUpdate,
    FooterLinkResponse,
    FooterResponse,
    FooterTextUpdate,
    SocialLinkResponse,
)
from studio_cms.application.services import FooterService
from studio_cms.domain.entities import Footer
from studio_cms.domain.exceptions import (
    ConfirmationRequiredError,
    EntityNotFoundError,
    InvalidFieldError,
    StoreWriteError,
)
from studio_cms.infrastructure.dependencies import get_footer_service, require_admin
from studio_cms.presentation.api.v1.endpoints.errors import save_failed

router = APIRouter(prefix="/admin/footer", tags=["Admin Footer"], dependencies=[Depends(require_admin)])


def footer_response(footer: Footer) -> FooterResponse:
    return FooterResponse(
        text=footer.text,
        links=[FooterLinkResponse(id=link.key, label=link.label, url=link.url) for link in footer.links],
        social=[SocialLinkResponse(id=s.key, platform=s.platform, url=s.url) for s in footer.social],
    )


@router.get("", response_model=FooterResponse)
async def get_footer(service: FooterService = Depends(get_footer_service)) -> FooterResponse:
    return footer_response(await service.get_footer())


@router.get("/text")
async def get_footer_text(service: FooterService = Depends(get_footer_service)) -> dict:
    return {"text": (await service.get_footer()).text}


@router.put("/text", response_model=FooterResponse)
async def update_footer_text(
    data: FooterTextUpdate,
    service: FooterService = Depends(get_footer_service),
) -> FooterResponse:
    try:
        await service.update_text(data.text)
    except StoreWriteError:
        raise save_failed()
    return footer_response(await service.get_footer())


@router.post("/{group}", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_footer_entry(
    group: str,
    service: FooterService = Depends(get_footer_service),
) -> CreatedResponse:
    """Add a link (``links``) or social profile (``social``) with default values."""
    try:
        key = await service.add_entry(group)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreWriteError:
        raise save_failed()
    return CreatedResponse(id=key)


@router.patch("/{group}/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def update_footer_entry(
    group: str,
    key: str,
    data: FooterEntryUpdate,
    service: FooterService = Depends(get_footer_service),
) -> None:
    try:
        await service.update_entry(group, key, data.field, data.value)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidFieldError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except StoreWriteError:
        raise save_failed()


@router.delete("/{group}/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_footer_entry(
    group: str,
    key: str,
    confirm: bool = Query(False, description="Must be true to delete"),
    service: FooterService = Depends(get_footer_service),
) -> None:
    try:
        await service.delete_entry(group, key, confirmed=confirm)
    except ConfirmationRequiredError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreWriteError:
        raise save_failed()
