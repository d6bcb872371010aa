"""Print a session token for manual testing.

Signs the given JSON claims with the configured ``ACCESS_TOKEN_SECRET``
so the result can be sent as the ``token`` cookie, e.g.::

    python create_token.py '{"email": "admin@example.com"}' --minutes 1440
"""
import argparse
import json
import sys
from typing import List, Optional

from booking_api.app.core.config import settings
from booking_api.app.core.security import TokenService


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("claims", help="JSON object to embed in the token")
    parser.add_argument(
        "--minutes",
        type=int,
        default=settings.access_token_expire_minutes,
        help="token lifetime in minutes",
    )
    args = parser.parse_args(argv)

    try:
        claims = json.loads(args.claims)
    except json.JSONDecodeError as exc:
        parser.error(f"claims are not valid JSON: {exc}")
    if not isinstance(claims, dict):
        parser.error("claims must be a JSON object")

    tokens = TokenService(settings.secret_key, lifetime_seconds=args.minutes * 60, algorithm=settings.algorithm)
    print(tokens.issue(claims))
    return 0


if __name__ == "__main__":
    sys.exit(main())
