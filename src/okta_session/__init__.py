"""Okta SAML session client.

Wraps requests to a service behind Okta single sign-on, logging in (with
push or SMS MFA) only when the cached session cookies stop working.
"""

from .config import OktaConfig
from .exceptions import (
    AuthenticationError,
    FactorRejectedError,
    MfaEnrollmentError,
    OktaSessionError,
    SessionCacheError,
    SessionLoopError,
    UnsupportedFactorError,
)
from .saml import extract_saml_response
from .session import OktaSession
from .store import CookieStore, Session

__all__ = [
    "OktaSession",
    "OktaConfig",
    "CookieStore",
    "Session",
    "extract_saml_response",
    "OktaSessionError",
    "AuthenticationError",
    "MfaEnrollmentError",
    "FactorRejectedError",
    "UnsupportedFactorError",
    "SessionCacheError",
    "SessionLoopError",
]
