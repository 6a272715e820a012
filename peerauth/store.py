"""
peerauth.store
~~~~~~~~~~~~~~
Read-only allow-list of peers, built once at startup from either a
credential file or two delimited strings.

Both sources strip whitespace around usernames and passwords.

credentials.txt
---------------
# comment
bob:foo
alice:$argon2id$v=19$m=65536,t=3,p=4$...
"""

from __future__ import annotations

import pathlib
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .errors import ConfigurationError
from .model import Peer

DEFAULT_DELIMITER = ";"


class PeerStore:
    def __init__(self, pairs: Iterable[Tuple[str, str]], source: str = "<memory>"):
        self.source = source
        self._peers: Dict[str, Peer] = {}
        for username, password in pairs:
            if not username:
                raise ConfigurationError(f"{source}: empty username")
            if username in self._peers:
                raise ConfigurationError(f"{source}: duplicate username {username!r}")
            self._peers[username] = Peer(username=username, stored_password=password)

    # ------------------------------------------------------------------ #
    # construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_file(cls, path: str | pathlib.Path) -> "PeerStore":
        path = pathlib.Path(path)
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read credential file {path}: {e}") from e

        store = cls(_parse_lines(path, lines), source=str(path))
        if not store:
            raise ConfigurationError(f"Credential file {path} defines no peers")
        return store

    @classmethod
    def from_strings(
        cls, users: str, passwords: str, delimiter: str = DEFAULT_DELIMITER
    ) -> "PeerStore":
        if not delimiter:
            raise ConfigurationError("Delimiter must not be empty")

        names = users.split(delimiter)
        secrets = passwords.split(delimiter)
        if len(names) != len(secrets):
            raise ConfigurationError(
                f"users and passwords differ in length "
                f"({len(names)} != {len(secrets)}) when split on {delimiter!r}"
            )
        return cls(
            ((u.strip(), p.strip()) for u, p in zip(names, secrets)), source="strings"
        )

    # ------------------------------------------------------------------ #
    # public
    # ------------------------------------------------------------------ #

    def lookup(self, username: str) -> Optional[Peer]:
        return self._peers.get(username)

    def __contains__(self, username: object) -> bool:
        return username in self._peers

    def __iter__(self) -> Iterator[str]:
        return iter(self._peers)

    def __len__(self) -> int:
        return len(self._peers)


def _parse_lines(path: pathlib.Path, lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
    for lineno, ln in enumerate(lines, start=1):
        ln = ln.strip()
        if not ln or ln.startswith("#"):
            continue
        if ":" not in ln:
            raise ConfigurationError(f"{path}:{lineno}: expected 'username:password'")
        user, pwd = ln.split(":", 1)
        user = user.strip()
        if not user:
            raise ConfigurationError(f"{path}:{lineno}: empty username")
        yield user, pwd.strip()
