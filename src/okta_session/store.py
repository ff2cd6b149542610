"""Per-host cookie cache persisted between runs."""

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from .config import DEFAULT_CACHE_FILE
from .exceptions import SessionCacheError


@dataclass
class Session:
    """Cookies known for each host, most recent value wins."""

    hosts: dict[str, dict[str, str]] = field(default_factory=dict)

    def cookies_for(self, host: str) -> dict[str, str]:
        return dict(self.hosts.get(host, {}))

    def merge(self, host: str, cookies: dict[str, str]) -> None:
        """Overlay cookies onto what is stored for host."""
        self.hosts[host] = {**self.hosts.get(host, {}), **cookies}

    def to_json(self) -> str:
        return json.dumps(self.hosts, indent=2, sort_keys=True)

    @classmethod
    def from_json(cls, text: str) -> "Session":
        """Parse a cache file body.

        Raises:
            SessionCacheError: If the text is not a host -> {name: value} object.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SessionCacheError(f"Session cache is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise SessionCacheError("Session cache must be a JSON object keyed by host")

        hosts = {}
        for host, cookies in data.items():
            if not isinstance(cookies, dict):
                raise SessionCacheError(f"Cookies for {host} must be a JSON object")
            for name, value in cookies.items():
                if not isinstance(value, str):
                    raise SessionCacheError(f"Cookie {name} for {host} must be a string")
            hosts[host] = dict(cookies)
        return cls(hosts=hosts)


class CookieStore:
    """Owns the in-memory session and its cache file.

    Every merge should be followed by persist() so a crash between
    requests never loses cookies that were already received.
    """

    def __init__(self, path: Path = DEFAULT_CACHE_FILE):
        self.path = Path(path)
        self.session = Session()

    def load(self) -> Session:
        """Read the cache file, or start empty if there is none."""
        if self.path.exists():
            self.session = Session.from_json(self.path.read_text())
        else:
            self.session = Session()
        return self.session

    def hosts(self) -> list[str]:
        return sorted(self.session.hosts)

    def cookies_for(self, host: str) -> dict[str, str]:
        return self.session.cookies_for(host)

    def merge(self, host: str, cookies: dict[str, str]) -> None:
        self.session.merge(host, cookies)

    def persist(self) -> None:
        """Atomically replace the cache file, readable by the owner only."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(self.session.to_json())
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def forget(self, host: str | None = None) -> None:
        """Drop cookies for one host, or delete the whole cache."""
        if host is None:
            self.session = Session()
            self.path.unlink(missing_ok=True)
            return
        self.session.hosts.pop(host, None)
        self.persist()
