"""Credential service adapters."""

from .firebase_credential_service import FirebaseCredentialService
from .static_credential_service import StaticCredentialService, hash_password

__all__ = ["FirebaseCredentialService", "StaticCredentialService", "hash_password"]
