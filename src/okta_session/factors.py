"""MFA factor drivers turning an authn state token into a session token."""

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Callable

from .authn import MFA_CHALLENGE, SUCCESS, session_token_of
from .exceptions import AuthenticationError, FactorRejectedError, UnsupportedFactorError
from .prompts import CredentialProvider

POLL_ATTEMPTS = 10
POLL_INTERVAL = 4

# factorResult values that end a push challenge without success
PUSH_FAILURES = {"REJECTED", "TIMEOUT"}

VerifyCall = Callable[..., dict[str, Any]]


class FactorDriver(ABC):
    """Resolve a session token for one kind of MFA factor.

    Args:
        verify: Calls the factor verify endpoint as
            verify(state_token, factor_id, pass_code=None) and returns the JSON body
        prompter: Operator interaction
        sleep: Blocking wait between polls
    """

    def __init__(
        self,
        verify: VerifyCall,
        prompter: CredentialProvider,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.verify = verify
        self.prompter = prompter
        self.sleep = sleep

    @abstractmethod
    def session_token(self, state_token: str, factor_id: str) -> str:
        ...


class PushFactor(FactorDriver):
    """Send a push notification and poll until it is approved."""

    def session_token(self, state_token: str, factor_id: str) -> str:
        self.prompter.status("Sending push notification...")
        for attempt in range(POLL_ATTEMPTS):
            if attempt:
                self.sleep(POLL_INTERVAL)
                self.prompter.status("polling for verification...")

            response = self.verify(state_token, factor_id)
            if response.get("status") == SUCCESS:
                return session_token_of(response)
            result = response.get("factorResult")
            if result in PUSH_FAILURES:
                raise FactorRejectedError(f"Okta push verification failed: {result}")
            if response.get("status") != MFA_CHALLENGE:
                raise AuthenticationError(
                    f"Unexpected Okta push verify response:\n{json.dumps(response)}"
                )

        raise AuthenticationError(
            f"Okta push not approved after {POLL_ATTEMPTS} attempts"
        )


class SmsFactor(FactorDriver):
    """Trigger an SMS and verify the code the operator types in."""

    def session_token(self, state_token: str, factor_id: str) -> str:
        if self.verify(state_token, factor_id).get("status") != MFA_CHALLENGE:
            raise AuthenticationError("Failed sending verification SMS, please try again")

        self.prompter.status("SMS verification code sent!")
        code = self.prompter.sms_code()

        response = self.verify(state_token, factor_id, pass_code=code)
        if response.get("status") == SUCCESS:
            return session_token_of(response)
        raise FactorRejectedError("Failed verifying Okta SMS code!")


DRIVERS: dict[str, type[FactorDriver]] = {
    "push": PushFactor,
    "sms": SmsFactor,
}


def driver_for(
    method: str,
    verify: VerifyCall,
    prompter: CredentialProvider,
    sleep: Callable[[float], None] = time.sleep,
) -> FactorDriver:
    """Build the driver for a configured factor method.

    Raises:
        UnsupportedFactorError: If no driver handles the method.
    """
    try:
        driver_cls = DRIVERS[method]
    except KeyError:
        raise UnsupportedFactorError(f"Okta login via {method} is unsupported!") from None
    return driver_cls(verify, prompter, sleep)
