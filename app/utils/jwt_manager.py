"""Utility for signing Google service-account JWT assertions."""

from datetime import datetime, timedelta, timezone

import jwt

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
SPREADSHEET_SCOPE = "https://www.googleapis.com/auth/spreadsheets"


def create_service_account_assertion(
    credentials: dict, scope: str = SPREADSHEET_SCOPE, lifetime_seconds: int = 3600
) -> str:
    """
    Creates the RS256 assertion exchanged for an OAuth access token.

    Args:
        credentials (dict): Parsed service-account JSON; needs client_email and private_key.
        scope (str): The OAuth scope requested.
        lifetime_seconds (int): Validity of the assertion.

    Returns:
        str: The encoded JWT token.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "iss": credentials["client_email"],
        "scope": scope,
        "aud": credentials.get("token_uri", GOOGLE_TOKEN_URI),
        "iat": now,
        "exp": now + timedelta(seconds=lifetime_seconds),
    }
    headers = {}
    if credentials.get("private_key_id"):
        headers["kid"] = credentials["private_key_id"]
    return jwt.encode(
        payload, credentials["private_key"], algorithm="RS256", headers=headers or None
    )
