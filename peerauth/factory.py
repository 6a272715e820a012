"""
peerauth.factory
~~~~~~~~~~~~~~~~
Builds the authentication pipeline from a :class:`~peerauth.config.Config`.

A credential file takes precedence over the users/passwords strings;
when both are set the strings are ignored and a warning is logged.
"""

from __future__ import annotations

from typing import Optional

from .acls import AuthorizationGate
from .auth import Authenticator, PeerAuthenticator
from .cache import CachingAuthenticator
from .config import Config
from .errors import ConfigurationError
from .guard import BasicAuthGuard
from .logger import AuthLogger
from .store import PeerStore


def create_store(config: Config, logger: Optional[AuthLogger] = None) -> PeerStore:
    logger = logger or AuthLogger(config.log_path)
    if config.credential_file is not None:
        if config.users is not None or config.passwords is not None:
            logger.config_warning(
                "credential file and users/passwords both set; using the file"
            )
        store = PeerStore.from_file(config.credential_file)
    elif config.users is not None and config.passwords is not None:
        store = PeerStore.from_strings(config.users, config.passwords, config.delimiter)
    else:
        raise ConfigurationError(
            "No peers configured: set a credential file or both users and passwords"
        )
    logger.store_loaded(store.source, len(store))
    return store


def create_authenticator(
    config: Config, logger: Optional[AuthLogger] = None
) -> PeerAuthenticator:
    logger = logger or AuthLogger(config.log_path)
    return PeerAuthenticator(
        create_store(config, logger), config.encryptor.verifier(), logger=logger
    )


def create_caching_authenticator(
    config: Config, logger: Optional[AuthLogger] = None
) -> CachingAuthenticator:
    if config.cache_spec is None:
        raise ConfigurationError(
            "Caching authenticator requested but no cache spec is configured"
        )
    logger = logger or AuthLogger(config.log_path)
    return CachingAuthenticator(
        create_authenticator(config, logger),
        config.cache_spec,
        cache_rejections=config.cache_rejections,
        logger=logger,
    )


def build_authenticator(
    config: Config, logger: Optional[AuthLogger] = None
) -> Authenticator:
    if config.cache_spec is not None:
        return create_caching_authenticator(config, logger)
    return create_authenticator(config, logger)


def build_guard(
    config: Config,
    gate: Optional[AuthorizationGate] = None,
    logger: Optional[AuthLogger] = None,
) -> BasicAuthGuard:
    return BasicAuthGuard(build_authenticator(config, logger), gate=gate, realm=config.realm)
