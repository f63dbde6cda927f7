#!/usr/bin/env python3
"""
Development token helper.

Prints a bearer token signed with JWT_SECRET_KEY from the environment/.env.
Usage: python scripts/issue_token.py admin@example.com [--role admin] [--minutes 60]
"""
import argparse
import sys
from datetime import timedelta
sys.path.insert(0, '.')

from school_api.core.auth import create_access_token


def main():
    parser = argparse.ArgumentParser(description="Issue a development bearer token")
    parser.add_argument("subject", help="value for the 'sub' claim")
    parser.add_argument("--role", default="admin")
    parser.add_argument("--minutes", type=int, default=None, help="lifetime (default: JWT_EXPIRE_MINUTES)")
    args = parser.parse_args()

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    token = create_access_token({"sub": args.subject, "role": args.role}, expires_delta=expires)
    print(token)


if __name__ == "__main__":
    main()
