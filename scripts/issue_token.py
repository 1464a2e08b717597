"""Mint a bearer token for local testing.

Usage: python scripts/issue_token.py someone@example.com ["Display Name"]
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.committee_attendance.committee_attendance.auth.tokens import TokenVerifier


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__.strip())
        raise SystemExit(2)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    verifier = TokenVerifier(settings.SECRET_KEY, max_age_seconds=settings.TOKEN_MAX_AGE_SECONDS)

    email = sys.argv[1].strip().lower()
    name = sys.argv[2] if len(sys.argv) > 2 else None
    print(verifier.issue(email, name=name))


if __name__ == "__main__":
    main()
