"""
peerauth
~~~~~~~~
Allow-list authentication for HTTP Basic peers, with optional password
hashing and decision caching.
"""

from .auth import Authenticator, PeerAuthenticator, decode_basic
from .cache import CacheSpec, CacheStats, CachingAuthenticator
from .config import Config, load_config
from .errors import AuthError, ConfigurationError, PeerAuthError, VerifierError
from .factory import (
    build_authenticator,
    build_guard,
    create_authenticator,
    create_caching_authenticator,
)
from .model import Authenticated, Credentials, Faulted, Peer, Rejected, VerificationResult
from .store import PeerStore
from .verifiers import Encryptor

__all__ = [
    "AuthError",
    "Authenticated",
    "Authenticator",
    "CacheSpec",
    "CacheStats",
    "CachingAuthenticator",
    "Config",
    "ConfigurationError",
    "Credentials",
    "Encryptor",
    "Faulted",
    "Peer",
    "PeerAuthError",
    "PeerAuthenticator",
    "PeerStore",
    "Rejected",
    "VerificationResult",
    "VerifierError",
    "build_authenticator",
    "build_guard",
    "create_authenticator",
    "create_caching_authenticator",
    "decode_basic",
    "load_config",
]
