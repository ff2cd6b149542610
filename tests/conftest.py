"""Pytest fixtures for okta_session tests."""

from pathlib import Path

import pytest

from okta_session.config import OktaConfig

OKTA_URL = "https://okta.example.com"
APP_ID = "app/example_backoffice/exk1abc/sso/saml"
SERVICE_HOST = "app.example.com"


class FakePrompter:
    """Canned operator answers, recording progress messages."""

    def __init__(self, email="jane@example.com", password="hunter2", code="123456"):
        self._email = email
        self._password = password
        self._code = code
        self.messages: list[str] = []
        self.code_prompts = 0

    def email(self) -> str:
        return self._email

    def password(self) -> str:
        return self._password

    def sms_code(self) -> str:
        self.code_prompts += 1
        return self._code

    def status(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def cache_file(tmp_path) -> Path:
    return tmp_path / "okta_session_cache"


@pytest.fixture
def config(cache_file) -> OktaConfig:
    return OktaConfig(
        okta_url=OKTA_URL,
        app_id=APP_ID,
        service_host=SERVICE_HOST,
        factor_method="push",
        cache_file=cache_file,
    )


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()
