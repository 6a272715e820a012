import sys
from dotenv import load_dotenv

load_dotenv(override=True)

from peerauth.cache import CachingAuthenticator
from peerauth.config import load_config
from peerauth.errors import ConfigurationError
from peerauth.factory import build_authenticator


def main():
    try:
        config = load_config()
        authenticator = build_authenticator(config)
    except ConfigurationError as e:
        print(f"▸ Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    cached = isinstance(authenticator, CachingAuthenticator)
    store = (authenticator.delegate if cached else authenticator).store
    print(
        f"▸ {len(store)} peers from {store.source}  realm={config.realm!r} "
        f"encryptor={config.encryptor.value} cache={'on' if cached else 'off'}"
    )


if __name__ == "__main__":
    main()
