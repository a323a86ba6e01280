"""Single-admin credential service backed by a PBKDF2 hash from settings."""

import hashlib
import hmac
import logging
import secrets

from studio_cms.application.interfaces import CredentialService
from studio_cms.domain.entities import Principal
from studio_cms.domain.exceptions import CredentialError

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 260_000


def hash_password(password: str, salt: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Hex PBKDF2-SHA256 digest, the format ``ADMIN_PASSWORD_HASH`` expects."""
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return digest.hex()


class StaticCredentialService(CredentialService):
    """Accepts exactly one email/password pair.

    Password resets cannot be delivered; they are logged and reported as
    failures so the caller shows the usual reset error.
    """

    def __init__(self, email: str, password_hash: str, salt: str, iterations: int = PBKDF2_ITERATIONS):
        self._email = email.strip().lower()
        self._password_hash = password_hash.strip().lower()
        self._salt = salt
        self._iterations = iterations

    @property
    def provider_name(self) -> str:
        return "static"

    async def sign_in(self, identifier: str, secret: str) -> Principal:
        if not self._password_hash:
            raise CredentialError("Sign in", "No admin password configured")

        candidate = hash_password(secret, self._salt, self._iterations)
        email_ok = hmac.compare_digest(identifier.strip().lower(), self._email)
        password_ok = hmac.compare_digest(candidate, self._password_hash)
        if not (email_ok and password_ok):
            raise CredentialError("Sign in")

        return Principal(uid="admin", email=self._email, id_token=secrets.token_hex(16))

    async def sign_out(self, principal: Principal) -> None:
        logger.debug("Signed out %s", principal.email)

    async def request_reset(self, identifier: str) -> None:
        logger.warning("Password reset requested for %s but the static backend cannot send email", identifier)
        raise CredentialError("Password reset", "Static backend has no mail delivery")
