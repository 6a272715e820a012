"""
peerauth.auth
~~~~~~~~~~~~~
Checks presented credentials against the peer store.  Unknown users and
wrong passwords both come back as ``Rejected`` so callers cannot tell
which usernames exist.
"""

from __future__ import annotations

import base64
from typing import Optional, Protocol

from .errors import AuthError, VerifierError
from .logger import AuthLogger
from .model import REJECTED, Authenticated, Credentials, Faulted, VerificationResult
from .store import PeerStore
from .verifiers import PasswordVerifier


class Authenticator(Protocol):
    def authenticate(self, credentials: Credentials) -> VerificationResult:
        ...


class PeerAuthenticator:
    def __init__(
        self,
        store: PeerStore,
        verifier: PasswordVerifier,
        logger: Optional[AuthLogger] = None,
    ) -> None:
        self.store = store
        self.verifier = verifier
        self.logger = logger or AuthLogger()

    def authenticate(self, credentials: Credentials) -> VerificationResult:
        peer = self.store.lookup(credentials.username)
        if peer is None:
            self.logger.rejected(credentials.username)
            return REJECTED

        try:
            ok = self.verifier.verify(credentials.password, peer.stored_password)
        except VerifierError as e:
            self.logger.faulted(peer.username, str(e))
            return Faulted(reason=str(e))

        if not ok:
            self.logger.rejected(peer.username)
            return REJECTED

        self.logger.authenticated(peer.username)
        return Authenticated(peer)


def decode_basic(header_val: str) -> Credentials:
    """Turn an ``Authorization: Basic ...`` value into credentials."""
    if not header_val or not header_val.lower().startswith("basic "):
        raise AuthError("Unsupported auth scheme")
    try:
        decoded = base64.b64decode(header_val.split(None, 1)[1], validate=True).decode("utf-8")
    except (ValueError, IndexError) as e:  # also binascii.Error, UnicodeDecodeError
        raise AuthError("Bad Base64") from e
    if ":" not in decoded:
        raise AuthError("Missing ':' in basic credentials")
    username, password = decoded.split(":", 1)
    return Credentials(username=username, password=password)
