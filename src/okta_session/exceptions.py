"""Custom exceptions for Okta session handling."""


class OktaSessionError(Exception):
    """Base exception for Okta session errors."""

    pass


class AuthenticationError(OktaSessionError):
    """Failed to authenticate with Okta."""

    pass


class MfaEnrollmentError(AuthenticationError):
    """Account has no MFA factor enrolled."""

    pass


class FactorRejectedError(AuthenticationError):
    """Operator declined (or let expire) the MFA challenge."""

    pass


class UnsupportedFactorError(OktaSessionError):
    """Configured factor method has no driver."""

    pass


class SessionCacheError(OktaSessionError):
    """Session cache file could not be parsed."""

    pass


class SessionLoopError(OktaSessionError):
    """Target application still asks for sign-in after re-authentication."""

    pass
