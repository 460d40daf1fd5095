"""Print a signed access token for an email.

Handy for exercising clients locally without going through /login.
The token is signed with ``JWT_SECRET`` from the environment.

Usage:
    python create_token.py admin@example.com [lifetime, e.g. 365d]
"""
import sys

from portfolio_api.app.core.config import parse_duration
from portfolio_api.app.core.security import create_access_token


if __name__ == "__main__":
    if len(sys.argv) < 2:
        sys.exit(__doc__)
    lifetime = parse_duration(sys.argv[2]) if len(sys.argv) > 2 else None
    print(create_access_token({"email": sys.argv[1]}, expires_delta=lifetime))
