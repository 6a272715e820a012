#!/usr/bin/env python3
"""Print the stored value of a password for a credential file line."""
from __future__ import annotations

import sys
from getpass import getpass

from peerauth.errors import ConfigurationError
from peerauth.verifiers import Encryptor


def main() -> None:
    try:
        encryptor = Encryptor.parse(sys.argv[1] if len(sys.argv) > 1 else "standard")
    except ConfigurationError as e:
        raise SystemExit(str(e))

    username = input("Username: ").strip()
    if not username or ":" in username:
        raise SystemExit("Username must be non-empty and must not contain ':'")

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    print(f"{username}:{encryptor.verifier().hash(pw1)}")


if __name__ == "__main__":
    main()
