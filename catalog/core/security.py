# catalog/core/security.py
from __future__ import annotations
from typing import Optional, Protocol
import hmac
import logging

from catalog.core.errors import Unauthorized

logger = logging.getLogger(__name__)


class CredentialVerifier(Protocol):
    """Anything able to tell whether a request-supplied credential is valid."""

    def verify(self, supplied: Optional[str]) -> bool: ...


class StaticSecretVerifier:
    """
    Shared-secret check against a single configured value.
    Comparison is constant-time; an empty configured secret denies everything.
    """

    def __init__(self, secret: str):
        self._secret = (secret or "").encode("utf-8")
        if not self._secret:
            logger.warning("ADMIN_PASSWORD is empty: every admin request will be denied")

    def verify(self, supplied: Optional[str]) -> bool:
        if not self._secret or supplied is None:
            return False
        return hmac.compare_digest(supplied.encode("utf-8"), self._secret)


class AdminGuard:
    def __init__(self, verifier: CredentialVerifier):
        self.verifier = verifier

    def authorize(self, supplied: Optional[str]) -> bool:
        return self.verifier.verify(supplied)

    def require(self, supplied: Optional[str]) -> None:
        if not self.authorize(supplied):
            logger.warning("admin check denied")
            raise Unauthorized()
