"""Authorization collaborators used before any mutating operation.

Two checks guard each request: a capability check on the acting user and a
request-forgery token bound to that user and the action being performed.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from django.core import signing

from tickets.conf import get_setting

logger = logging.getLogger(__name__)


class Authorizer(ABC):
    """Interface for capability and request-token checks."""

    @abstractmethod
    def authorize(self, subject: Any, permission: str, resource: Any = None) -> bool:
        """Return whether ``subject`` holds ``permission`` on ``resource``."""
        ...

    @abstractmethod
    def make_token(self, subject: Any, action: str) -> str:
        """Issue a token for ``subject`` to perform ``action``."""
        ...

    @abstractmethod
    def verify_token(self, subject: Any, token: str | None, action: str) -> bool:
        """Return whether ``token`` was issued to ``subject`` for ``action``."""
        ...


class DjangoAuthorizer(Authorizer):
    """Uses Django permissions and signed, expiring per-action tokens."""

    def __init__(self, max_age: int | None = None) -> None:
        self._max_age = max_age if max_age is not None else get_setting("TOKEN_MAX_AGE")

    def authorize(self, subject: Any, permission: str, resource: Any = None) -> bool:
        if subject is None or not getattr(subject, "is_authenticated", False):
            return False
        return subject.has_perm(permission)

    def make_token(self, subject: Any, action: str) -> str:
        return self._signer(action).sign(str(subject.pk))

    def verify_token(self, subject: Any, token: str | None, action: str) -> bool:
        if not token or subject is None or not getattr(subject, "is_authenticated", False):
            return False
        try:
            value = self._signer(action).unsign(token, max_age=self._max_age)
        except signing.SignatureExpired:
            logger.info("Expired %s token for user %s", action, subject.pk)
            return False
        except signing.BadSignature:
            logger.warning("Bad %s token for user %s", action, subject.pk)
            return False
        return value == str(subject.pk)

    def _signer(self, action: str) -> signing.TimestampSigner:
        return signing.TimestampSigner(salt=f"tickets.token.{action}")
