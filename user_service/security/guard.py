"""Self-only authorization decisions."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain.errors import forbidden

logger = logging.getLogger(__name__)

REASON_MISSING_CALLER = "missing caller"
REASON_MISSING_TARGET = "missing target"
REASON_MISMATCH = "identity mismatch"


@dataclass(frozen=True, slots=True)
class AuthorizationDecision:
    allowed: bool
    reason: str | None = None


ALLOW = AuthorizationDecision(allowed=True)


def authorize(caller_email: str | None, target_email: str | None) -> AuthorizationDecision:
    """Allow only when the verified caller and the target account are the same.

    The comparison is an exact, case-sensitive match on the stored form of the
    email identifier. There is no administrative override.
    """
    if not caller_email:
        return AuthorizationDecision(allowed=False, reason=REASON_MISSING_CALLER)
    if not target_email:
        return AuthorizationDecision(allowed=False, reason=REASON_MISSING_TARGET)
    if caller_email != target_email:
        return AuthorizationDecision(allowed=False, reason=REASON_MISMATCH)
    return ALLOW


def require_self(caller_email: str | None, target_email: str | None) -> None:
    """Raise ``Forbidden`` unless ``authorize`` allows the call."""
    decision = authorize(caller_email, target_email)
    if not decision.allowed:
        logger.warning("authorization denied: %s", decision.reason)
        raise forbidden()
