"""
peerauth.guard
~~~~~~~~~~~~~~
Maps an ``Authorization`` header onto an HTTP outcome:

200  authenticated and permitted by the gate
401  missing/undecodable header or rejected credentials (with challenge)
403  authenticated but denied by the gate
500  the verifier faulted
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .acls import AuthorizationGate, PermitAllGate
from .auth import Authenticator, decode_basic
from .errors import AuthError
from .model import Authenticated, Faulted, Peer

DEFAULT_REALM = "peers"


@dataclass(frozen=True)
class GuardDecision:
    status: int
    peer: Optional[Peer] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def allowed(self) -> bool:
        return self.status == 200


class BasicAuthGuard:
    def __init__(
        self,
        authenticator: Authenticator,
        gate: Optional[AuthorizationGate] = None,
        realm: str = DEFAULT_REALM,
        header: str = "authorization",
    ) -> None:
        self.authenticator = authenticator
        self.gate = gate or PermitAllGate()
        self.realm = realm
        self.header = header.lower()

    def check(self, headers: Dict[str, str], method: str = "GET", target: str = "/") -> GuardDecision:
        """*headers* keys are matched case-insensitively."""
        raw = next((v for k, v in headers.items() if k.lower() == self.header), None)
        if not raw:
            return self._challenge()
        try:
            credentials = decode_basic(raw)
        except AuthError:
            return self._challenge()

        result = self.authenticator.authenticate(credentials)
        if isinstance(result, Faulted):
            return GuardDecision(500)
        if not isinstance(result, Authenticated):
            return self._challenge()
        if not self.gate.permit(result.peer, method, target):
            return GuardDecision(403, peer=result.peer)
        return GuardDecision(200, peer=result.peer)

    def _challenge(self) -> GuardDecision:
        return GuardDecision(
            401, headers={"WWW-Authenticate": f'Basic realm="{self.realm}"'}
        )
