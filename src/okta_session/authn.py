"""Okta authn API response models."""

import json
from dataclasses import dataclass, field
from typing import Any

from .exceptions import AuthenticationError

SUCCESS = "SUCCESS"
MFA_REQUIRED = "MFA_REQUIRED"
MFA_ENROLL = "MFA_ENROLL"
MFA_CHALLENGE = "MFA_CHALLENGE"


def session_token_of(data: dict[str, Any]) -> str:
    """sessionToken of a SUCCESS reply.

    Raises:
        AuthenticationError: If the reply carries no token.
    """
    token = data.get("sessionToken")
    if not token:
        raise AuthenticationError(
            f"Okta reported SUCCESS without a sessionToken\nFull Okta response:\n{json.dumps(data)}"
        )
    return token


@dataclass
class Factor:
    """Enrolled MFA method."""

    factor_type: str
    id: str


@dataclass
class AuthnResponse:
    """Response to POST /api/v1/authn."""

    status: str | None = None
    state_token: str | None = None
    session_token: str | None = None
    factors: list[Factor] = field(default_factory=list)
    raw: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any], raw: str = "") -> "AuthnResponse":
        embedded = data.get("_embedded") or {}
        factors = [
            Factor(factor_type=f.get("factorType", ""), id=f.get("id", ""))
            for f in embedded.get("factors") or []
            if isinstance(f, dict)
        ]
        return cls(
            status=data.get("status"),
            state_token=data.get("stateToken"),
            session_token=data.get("sessionToken"),
            factors=factors,
            raw=raw,
        )

    def factor(self, factor_type: str) -> Factor | None:
        """First enrolled factor of the given type."""
        for f in self.factors:
            if f.factor_type == factor_type:
                return f
        return None
