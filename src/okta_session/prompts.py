"""Operator interaction: credential and code prompts, progress messages."""

from typing import Protocol

from rich.console import Console


class CredentialProvider(Protocol):
    """Anything able to ask the operator for login details."""

    def email(self) -> str: ...

    def password(self) -> str: ...

    def sms_code(self) -> str: ...

    def status(self, message: str) -> None: ...


class ConsolePrompter:
    """Prompts on the terminal; the password is read without echo."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def email(self) -> str:
        return self.console.input("Your Okta email: ").strip()

    def password(self) -> str:
        return self.console.input("Your Okta password: ", password=True)

    def sms_code(self) -> str:
        return self.console.input("Enter code: ").strip()

    def status(self, message: str) -> None:
        self.console.print(message)
