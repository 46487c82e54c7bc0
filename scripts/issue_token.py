"""Issue a development bearer token for an owner id.

Usage:
    python -m scripts.issue_token <owner_id> [expire_minutes]
Prints the JWT; send it as "Authorization: Bearer <token>".
Uses SECRET_KEY and ALGORITHM from the environment / .env.
"""

import sys
from datetime import timedelta

from tasknest.core.config import get_settings
from tasknest.infrastructure.security.jwt import create_access_token


def main() -> None:
    """Print a token whose sub claim is the given owner id."""
    if len(sys.argv) < 2:
        print(
            "Usage: python -m scripts.issue_token <owner_id> [expire_minutes]",
            file=sys.stderr,
        )
        sys.exit(1)
    owner_id = sys.argv[1].strip()
    if not owner_id:
        print("owner_id must not be empty", file=sys.stderr)
        sys.exit(1)
    expires = None
    if len(sys.argv) > 2:
        try:
            expires = timedelta(minutes=int(sys.argv[2]))
        except ValueError:
            print("expire_minutes must be an integer", file=sys.stderr)
            sys.exit(1)

    get_settings()
    print(create_access_token(owner_id, expires_delta=expires))


if __name__ == "__main__":
    main()
