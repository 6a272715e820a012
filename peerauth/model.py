"""
peerauth.model
~~~~~~~~~~~~~~
Value types flowing through the authentication pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class Credentials:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class Peer:
    username: str
    stored_password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class Authenticated:
    peer: Peer


@dataclass(frozen=True, slots=True)
class Rejected:
    pass


@dataclass(frozen=True, slots=True)
class Faulted:
    reason: str


VerificationResult = Union[Authenticated, Rejected, Faulted]

REJECTED = Rejected()
