"""
peerauth.errors
~~~~~~~~~~~~~~~
Exception types.  Wrong passwords are never exceptions; they come back
as a ``Rejected`` result.
"""

from __future__ import annotations


class PeerAuthError(Exception):
    pass


class ConfigurationError(PeerAuthError):
    """Invalid startup configuration.  Fatal: do not start serving."""


class VerifierError(PeerAuthError):
    """The password verifier could not decide (e.g. corrupt stored hash)."""


class AuthError(PeerAuthError):
    """Unusable Authorization header."""
