"""
peerauth.acls
~~~~~~~~~~~~~
Authorization hook run after a peer has authenticated.  Real role or
path rules belong to the host application; implement ``AuthorizationGate``
and hand it to the guard.
"""

from __future__ import annotations

from typing import Protocol

from .model import Peer


class AuthorizationGate(Protocol):
    def permit(self, peer: Peer, method: str, target: str) -> bool:
        ...


class PermitAllGate:
    def permit(self, peer: Peer, method: str, target: str) -> bool:  # noqa: D401
        """Every authenticated peer is allowed."""
        return True
