"""Okta SAML session for a target application, with cookie caching.

Flow when the application serves its sign-in page:
    1. GET {service}/auth/saml without following redirects; Location is the
       Okta SAML URL for the app
    2. GET that URL; an authenticated Okta session answers with an
       auto-submit form carrying SAMLResponse
    3. If it doesn't, log in through /api/v1/authn (+ push or SMS factor),
       redeem the session token at /login/sessionCookieRedirect and retry once
    4. POST the assertion to {service}/auth/saml/callback
    5. Replay the original request

Cookies for every host touched are cached on disk, so later runs skip all
of the above until the application session expires.
"""

import time
from typing import Any, Callable
from urllib.parse import urlparse

import httpx

from .authn import MFA_ENROLL, MFA_REQUIRED, SUCCESS, AuthnResponse
from .config import OktaConfig
from .exceptions import AuthenticationError, MfaEnrollmentError, SessionLoopError
from .factors import driver_for
from .prompts import ConsolePrompter, CredentialProvider
from .saml import extract_saml_response
from .store import CookieStore
from .transport import Transport, received_cookies

# Extra SAML fetches after a fresh login
SAML_RETRIES = 1

# Replays of a request that hit the sign-in page
SIGN_IN_RETRIES = 1

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class OktaSession:
    """HTTP session against a service behind Okta SAML SSO.

    Example:
        session = OktaSession(OktaConfig(
            okta_url="https://corp.okta-emea.com",
            app_id="app/corp_backoffice/exk1abc/sso/saml",
            service_host="backoffice.example.com",
        ))
        response = session.get("api/users/me")
    """

    def __init__(
        self,
        config: OktaConfig,
        store: CookieStore | None = None,
        transport: Transport | None = None,
        prompter: CredentialProvider | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.store = store or CookieStore(config.cache_file)
        self.store.load()
        self.transport = transport or Transport(timeout=config.timeout)
        self.prompter = prompter or ConsolePrompter()
        self.sleep = sleep

    def url_for(self, path: str) -> str:
        return f"{self.config.service_url}/{path.lstrip('/')}"

    def get(self, path: str, **opts: Any) -> httpx.Response:
        return self.session_request("GET", self.url_for(path), **opts)

    def post(self, path: str, **opts: Any) -> httpx.Response:
        return self.session_request("POST", self.url_for(path), **opts)

    def put(self, path: str, **opts: Any) -> httpx.Response:
        return self.session_request("PUT", self.url_for(path), **opts)

    def session_request(self, method: str, url: str, **opts: Any) -> httpx.Response:
        """Send a request, re-establishing the session if the app wants sign-in.

        Raises:
            SessionLoopError: If the sign-in page comes back after re-authentication.
        """
        for attempt in range(SIGN_IN_RETRIES + 1):
            response = self._send(method, url, **opts)
            if self.config.sign_in_marker not in response.text:
                self._remember(response)
                return response
            if attempt < SIGN_IN_RETRIES:
                self.prompter.status("Session expired, signing in via Okta...")
                self.establish_session()

        raise SessionLoopError(
            f"{url} still shows the sign-in page after re-authenticating with Okta"
        )

    def establish_session(self) -> httpx.Response:
        """Run the SAML handshake and post the assertion back to the service."""
        response = self._exchange("GET", self.url_for("auth/saml"), follow_redirects=False)
        saml_url = response.headers.get("location")
        if not saml_url:
            raise AuthenticationError(
                f"No SAML redirect from {self.url_for('auth/saml')} (HTTP {response.status_code})"
            )

        return self._exchange(
            "POST",
            self.url_for("auth/saml/callback"),
            headers={"Referer": saml_url},
            data={"SAMLResponse": self.saml(saml_url), "RelayState": ""},
        )

    def saml(self, saml_url: str) -> str:
        """Fetch the SAML assertion, logging in to Okta if it isn't served."""
        for attempt in range(SAML_RETRIES + 1):
            response = self._exchange("GET", saml_url, follow_redirects=False)
            if response.status_code == 200:
                assertion = extract_saml_response(response.text)
                if assertion:
                    return assertion
            if attempt < SAML_RETRIES:
                self.authenticate()

        raise AuthenticationError("Failed authenticating to Okta!")

    def authenticate(self) -> httpx.Response:
        """Log in to Okta with operator credentials and the configured factor.

        Raises:
            MfaEnrollmentError: If the account has no MFA set up.
            AuthenticationError: On any other non-success status.
        """
        email = self.prompter.email()
        password = self.prompter.password()

        response = self._exchange(
            "POST",
            f"{self.config.okta_base}/api/v1/authn",
            headers=JSON_HEADERS,
            json={"username": email, "password": password},
            follow_redirects=False,
        )
        authn = AuthnResponse.from_json(self._json(response), raw=response.text)

        if authn.status == MFA_ENROLL:
            raise MfaEnrollmentError(
                "Okta MFA is not set up for your account! Please contact IT support"
            )
        if authn.status == MFA_REQUIRED:
            factor = authn.factor(self.config.factor_method)
            if factor is None:
                raise AuthenticationError(
                    f"No enrolled Okta factor of type {self.config.factor_method}\n"
                    f"Full Okta response:\n{authn.raw}"
                )
            driver = driver_for(
                self.config.factor_method, self.verify_factor, self.prompter, self.sleep
            )
            return self.redeem_session_token(driver.session_token(authn.state_token, factor.id))
        if authn.status == SUCCESS:
            if not authn.session_token:
                raise AuthenticationError(
                    f"Okta reported SUCCESS without a sessionToken\nFull Okta response:\n{authn.raw}"
                )
            return self.redeem_session_token(authn.session_token)

        raise AuthenticationError(
            f"Unrecognized Okta authn response status: `{authn.status}`\n"
            f"Full Okta response:\n{authn.raw}"
        )

    def verify_factor(
        self, state_token: str, factor_id: str, pass_code: str | None = None
    ) -> dict[str, Any]:
        """POST to the factor verify endpoint and return its JSON body."""
        body = {"stateToken": state_token}
        if pass_code is not None:
            body["passCode"] = pass_code

        response = self._exchange(
            "POST",
            f"{self.config.okta_base}/api/v1/authn/factors/{factor_id}/verify",
            headers=JSON_HEADERS,
            json=body,
        )
        return self._json(response)

    def redeem_session_token(self, session_token: str) -> httpx.Response:
        """Exchange the one-time session token for Okta session cookies."""
        return self._exchange(
            "GET",
            f"{self.config.okta_base}/login/sessionCookieRedirect",
            params={
                "checkAccountSetupComplete": "true",
                "token": session_token,
                "redirectUrl": self.config.app_url,
            },
            follow_redirects=False,
        )

    def _send(self, method: str, url: str, **opts: Any) -> httpx.Response:
        host = urlparse(url).hostname or ""
        return self.transport.request(
            method, url, cookies=self.store.cookies_for(host), **opts
        )

    def _exchange(self, method: str, url: str, **opts: Any) -> httpx.Response:
        """Send without sign-in detection; the marker belongs to the target app."""
        response = self._send(method, url, **opts)
        self._remember(response)
        return response

    def _remember(self, response: httpx.Response) -> None:
        cookies = received_cookies(response)
        if not cookies:
            return
        for host, values in cookies.items():
            self.store.merge(host, values)
        self.store.persist()

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise AuthenticationError(
                f"Expected JSON from {response.url} (HTTP {response.status_code}), got:\n"
                f"{response.text}"
            ) from e
        if not isinstance(data, dict):
            raise AuthenticationError(f"Unexpected JSON from {response.url}:\n{response.text}")
        return data
