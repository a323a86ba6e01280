"""Admin editor endpoints for every ordered collection."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from studio_cms.application.schemas import (
    CollectionResponse,
    CreatedResponse,
    FieldUpdate,
    FieldUpdateResponse,
    OrderedRecordResponse,
    ReorderRequest,
    ReorderResponse,
)
from studio_cms.application.services import CollectionEditor, EditorRegistry
from studio_cms.domain.entities import OrderedRecord
from studio_cms.domain.exceptions import (
    ActionNotAllowedError,
    ConfirmationRequiredError,
    EntityNotFoundError,
    InvalidFieldError,
    InvalidReorderError,
    ReorderFailedError,
    StoreWriteError,
)
from studio_cms.infrastructure.dependencies import get_editor_registry, require_admin
from studio_cms.presentation.api.v1.endpoints.errors import save_failed

router = APIRouter(
    prefix="/admin/collections",
    tags=["Admin Collections"],
    dependencies=[Depends(require_admin)],
)


def _to_response(record: OrderedRecord) -> OrderedRecordResponse:
    return OrderedRecordResponse(id=record.key, order=record.order, fields=record.fields)


def _collection(editor: CollectionEditor, records: list[OrderedRecord]) -> CollectionResponse:
    return CollectionResponse(
        domain=editor.schema.domain,
        section=editor.schema.section,
        mode=editor.mode.value,
        sync_state=editor.sync_state.value,
        items=[_to_response(r) for r in records],
    )


def _editor(domain: str, registry: EditorRegistry) -> CollectionEditor:
    try:
        return registry.get(domain)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=list[str])
async def list_domains(registry: EditorRegistry = Depends(get_editor_registry)) -> list[str]:
    return registry.domains


@router.get("/{domain}", response_model=CollectionResponse)
async def get_collection(
    domain: str,
    registry: EditorRegistry = Depends(get_editor_registry),
) -> CollectionResponse:
    """Current records in display order, including any pending optimistic reorder."""
    editor = _editor(domain, registry)
    return _collection(editor, editor.records)


@router.post("/{domain}/items", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_item(
    domain: str,
    registry: EditorRegistry = Depends(get_editor_registry),
) -> CreatedResponse:
    editor = _editor(domain, registry)
    try:
        key = await editor.add()
    except ActionNotAllowedError as e:
        raise HTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail=str(e))
    except StoreWriteError:
        raise save_failed()
    return CreatedResponse(id=key)


@router.patch("/{domain}/items/{key}", response_model=FieldUpdateResponse)
async def update_item(
    domain: str,
    key: str,
    data: FieldUpdate,
    registry: EditorRegistry = Depends(get_editor_registry),
) -> FieldUpdateResponse:
    editor = _editor(domain, registry)
    try:
        stored = await editor.update_field(key, data.field, data.value)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidFieldError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except StoreWriteError:
        raise save_failed()
    return FieldUpdateResponse(id=key, field=data.field, value=stored)


@router.delete("/{domain}/items/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    domain: str,
    key: str,
    confirm: bool = Query(False, description="Must be true to delete"),
    registry: EditorRegistry = Depends(get_editor_registry),
) -> None:
    editor = _editor(domain, registry)
    try:
        await editor.delete(key, confirmed=confirm)
    except ConfirmationRequiredError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreWriteError:
        raise save_failed()


@router.post("/{domain}/reorder", response_model=ReorderResponse)
async def reorder_items(
    domain: str,
    data: ReorderRequest,
    registry: EditorRegistry = Depends(get_editor_registry),
) -> ReorderResponse:
    """Apply a drag result: move ``source_index`` to ``destination_index`` and renumber."""
    editor = _editor(domain, registry)
    try:
        result = await editor.reorder(data.source_index, data.destination_index)
    except InvalidReorderError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ReorderFailedError:
        raise save_failed()
    return ReorderResponse(
        cancelled=result.cancelled,
        written=len(result.written_keys),
        items=[_to_response(r) for r in result.records],
    )


@router.post("/{domain}/preview")
async def toggle_preview(
    domain: str,
    registry: EditorRegistry = Depends(get_editor_registry),
) -> dict:
    editor = _editor(domain, registry)
    return {"domain": domain, "mode": editor.toggle_preview().value}


@router.get("/{domain}/preview", response_model=CollectionResponse)
async def get_preview(
    domain: str,
    registry: EditorRegistry = Depends(get_editor_registry),
) -> CollectionResponse:
    """What the public landing page shows for this collection."""
    editor = _editor(domain, registry)
    return _collection(editor, editor.preview())
