"""
Mint a bearer token for an email principal (local testing without the identity provider).
Usage: python -m app.scripts.issue_token user@example.com [--minutes 60]
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from app.core.security import create_access_token


def main(argv=None):
    parser = argparse.ArgumentParser(description="Issue a session token for an email.")
    parser.add_argument("email")
    parser.add_argument("--minutes", type=int, default=None, help="Token lifetime (default from settings)")
    args = parser.parse_args(argv)

    email = args.email.strip().lower()
    if "@" not in email:
        print(f"Not an email address: {args.email}")
        sys.exit(1)
    print(create_access_token(email, expires_minutes=args.minutes))


if __name__ == "__main__":
    main()
