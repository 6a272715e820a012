"""
peerauth.config
~~~~~~~~~~~~~~~
Startup configuration read from the environment (and ``.env``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .cache import CacheSpec
from .errors import ConfigurationError
from .guard import DEFAULT_REALM
from .store import DEFAULT_DELIMITER
from .verifiers import Encryptor

_TRUE = {"1", "true", "yes", "y"}
_FALSE = {"0", "false", "no", "n"}


@dataclass
class Config:
    realm: str = DEFAULT_REALM
    cache_spec: Optional[CacheSpec] = None
    cache_rejections: bool = True
    credential_file: Optional[str] = None
    users: Optional[str] = None
    passwords: Optional[str] = None
    delimiter: str = DEFAULT_DELIMITER
    encryptor: Encryptor = Encryptor.NONE
    log_path: Optional[str] = None


def _flag(name: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigurationError(f"{name}={raw!r}: expected true or false")


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    if environ is None:
        load_dotenv(override=True)
        environ = os.environ

    cache_raw = environ.get("PEERAUTH_CACHE_SPEC")
    return Config(
        realm=environ.get("PEERAUTH_REALM", DEFAULT_REALM),
        cache_spec=CacheSpec.parse(cache_raw) if cache_raw else None,
        cache_rejections=_flag(
            "PEERAUTH_CACHE_REJECTIONS", environ.get("PEERAUTH_CACHE_REJECTIONS", "true")
        ),
        credential_file=environ.get("PEERAUTH_CREDENTIAL_FILE") or None,
        users=environ.get("PEERAUTH_USERS"),
        passwords=environ.get("PEERAUTH_PASSWORDS"),
        delimiter=environ.get("PEERAUTH_DELIMITER", DEFAULT_DELIMITER),
        encryptor=Encryptor.parse(environ.get("PEERAUTH_ENCRYPTOR", "none")),
        log_path=environ.get("PEERAUTH_LOG_PATH") or None,
    )
