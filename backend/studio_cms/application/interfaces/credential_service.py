"""Abstract credential service (port) — opaque sign-in / sign-out / reset."""

from abc import ABC, abstractmethod

from studio_cms.domain.entities import Principal


class CredentialService(ABC):
    """Port for authentication providers (Firebase Identity Toolkit, static admin)."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @abstractmethod
    async def sign_in(self, identifier: str, secret: str) -> Principal:
        """Authenticate and return the principal.

        Raises:
            CredentialError: For any failure; never says whether the identifier exists.
        """
        ...

    @abstractmethod
    async def sign_out(self, principal: Principal) -> None:
        ...

    @abstractmethod
    async def request_reset(self, identifier: str) -> None:
        """Send a password-reset message.

        Raises:
            CredentialError: If the provider refused the request.
        """
        ...
