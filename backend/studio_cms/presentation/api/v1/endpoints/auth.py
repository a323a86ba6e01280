"""Admin authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from studio_cms.application.schemas import ResetRequest, SessionResponse, SignInRequest
from studio_cms.application.services import SessionRegistry
from studio_cms.config import get_settings
from studio_cms.domain.exceptions import CredentialError
from studio_cms.infrastructure.dependencies import get_session_registry, get_session_token
from studio_cms.presentation.api.v1.endpoints.errors import RESET_FAILED, SIGN_IN_FAILED

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    data: SignInRequest,
    response: Response,
    sessions: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Exchange admin credentials for a bearer token (also set as a cookie)."""
    try:
        token, context = await sessions.sign_in(data.email, data.password)
    except CredentialError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=SIGN_IN_FAILED)

    response.set_cookie(get_settings().session_cookie_name, token, httponly=True, samesite="lax")
    return SessionResponse(
        authenticated=True,
        email=context.principal.email if context.principal else None,
        token=token,
    )


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    response: Response,
    token: str | None = Depends(get_session_token),
    sessions: SessionRegistry = Depends(get_session_registry),
) -> None:
    if token:
        await sessions.sign_out(token)
    response.delete_cookie(get_settings().session_cookie_name)


@router.post("/reset", status_code=status.HTTP_202_ACCEPTED)
async def request_reset(
    data: ResetRequest,
    sessions: SessionRegistry = Depends(get_session_registry),
) -> dict:
    try:
        await sessions.request_reset(data.email)
    except CredentialError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=RESET_FAILED)
    return {"message": "Password reset email sent"}


@router.get("/session", response_model=SessionResponse)
async def current_session(
    token: str | None = Depends(get_session_token),
    sessions: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    context = sessions.get(token)
    if context is None or context.principal is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, loading=context.loading, email=context.principal.email)
