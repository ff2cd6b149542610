"""Configuration handling for Okta sessions."""

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CACHE_FILE = Path.home() / "okta_session_cache"

# Generous so authenticated downloads of huge files don't time out
DEFAULT_TIMEOUT = 3600.0

# Page title the target application serves when the session is gone
DEFAULT_SIGN_IN_MARKER = "Vinted - Sign In"


def _factor_from_env() -> str:
    return os.environ.get("OKTA_FACTOR") or "push"


@dataclass(frozen=True)
class OktaConfig:
    """Configuration for an Okta-backed session.

    Identity provider URL, app id and service host are given by the caller;
    the factor method defaults to OKTA_FACTOR (or "push").
    """

    okta_url: str = ""
    app_id: str = ""
    service_host: str = ""
    factor_method: str = field(default_factory=_factor_from_env)
    cache_file: Path = DEFAULT_CACHE_FILE
    timeout: float = DEFAULT_TIMEOUT
    sign_in_marker: str = DEFAULT_SIGN_IN_MARKER

    @property
    def okta_base(self) -> str:
        return self.okta_url.rstrip("/")

    @property
    def service_url(self) -> str:
        return f"https://{self.service_host}"

    @property
    def app_url(self) -> str:
        """Redirect target handed to Okta after session token redemption."""
        return f"{self.okta_base}/{self.app_id.lstrip('/')}"

    @classmethod
    def from_env(cls) -> "OktaConfig":
        """Load configuration from environment variables.

        Environment variables:
            OKTA_URL: Identity provider base URL (e.g., https://corp.okta-emea.com)
            OKTA_APP_ID: Application path on the identity provider
            OKTA_SERVICE_HOST: Host of the target application
            OKTA_FACTOR: MFA factor method, "push" or "sms"
            OKTA_SESSION_CACHE: Path of the cookie cache file
            OKTA_TIMEOUT: Request timeout in seconds
            OKTA_SIGN_IN_MARKER: Text identifying the sign-in page

        Returns:
            OktaConfig instance
        """
        cache_file = os.environ.get("OKTA_SESSION_CACHE")
        return cls(
            okta_url=os.environ.get("OKTA_URL", ""),
            app_id=os.environ.get("OKTA_APP_ID", ""),
            service_host=os.environ.get("OKTA_SERVICE_HOST", ""),
            cache_file=Path(cache_file).expanduser() if cache_file else DEFAULT_CACHE_FILE,
            timeout=float(os.environ.get("OKTA_TIMEOUT", DEFAULT_TIMEOUT)),
            sign_in_marker=os.environ.get("OKTA_SIGN_IN_MARKER", DEFAULT_SIGN_IN_MARKER),
        )

    def validate(self) -> list[str]:
        """Validate configuration, returning list of missing fields."""
        missing = []
        if not self.okta_url:
            missing.append("okta_url (OKTA_URL)")
        if not self.app_id:
            missing.append("app_id (OKTA_APP_ID)")
        if not self.service_host:
            missing.append("service_host (OKTA_SERVICE_HOST)")
        return missing
