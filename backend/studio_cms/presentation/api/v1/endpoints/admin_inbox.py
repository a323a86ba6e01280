"""Admin views of contact submissions and the activity log."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from studio_cms.application.schemas import ActivityLogResponse, ContactResponse
from studio_cms.application.services import InboxService
from studio_cms.domain.exceptions import (
    ConfirmationRequiredError,
    EntityNotFoundError,
    StoreWriteError,
)
from studio_cms.infrastructure.dependencies import get_inbox_service, require_admin
from studio_cms.presentation.api.v1.endpoints.errors import save_failed

router = APIRouter(prefix="/admin", tags=["Admin Inbox"], dependencies=[Depends(require_admin)])


@router.get("/contacts", response_model=list[ContactResponse])
async def list_contacts(service: InboxService = Depends(get_inbox_service)) -> list[ContactResponse]:
    """Contact submissions, newest first."""
    return [
        ContactResponse(
            id=c.key,
            name=c.name,
            email=c.email,
            phone=c.phone,
            description=c.description,
            timestamp=c.timestamp,
        )
        for c in await service.list_contacts()
    ]


@router.delete("/contacts/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    key: str,
    confirm: bool = Query(False, description="Must be true to delete"),
    service: InboxService = Depends(get_inbox_service),
) -> None:
    try:
        await service.delete_contact(key, confirmed=confirm)
    except ConfirmationRequiredError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreWriteError:
        raise save_failed()


@router.get("/activity-logs", response_model=list[ActivityLogResponse])
async def list_activity_logs(
    limit: int | None = Query(None, ge=1, le=1000),
    service: InboxService = Depends(get_inbox_service),
) -> list[ActivityLogResponse]:
    return [
        ActivityLogResponse(id=e.key, action=e.action, section=e.section, timestamp=e.timestamp)
        for e in await service.list_activity(limit)
    ]
