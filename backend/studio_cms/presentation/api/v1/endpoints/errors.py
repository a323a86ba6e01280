"""User-facing failure messages shared by the endpoint modules."""

from fastapi import HTTPException, status

SAVE_FAILED = "Failed to save changes. Please try again."
SIGN_IN_FAILED = "Failed to sign in. Please check your credentials."
RESET_FAILED = "Failed to send reset email. Please check your email address."


def save_failed() -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=SAVE_FAILED)
