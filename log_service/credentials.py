"""
Tenant credential issuance.
"""

import uuid

API_KEY_LENGTH = 32


def issue_id() -> str:
    """Random 128-bit identifier in canonical UUID form."""
    return str(uuid.uuid4())


def issue_api_key() -> str:
    """32-character secret: a random UUID with separators removed."""
    return uuid.uuid4().hex[:API_KEY_LENGTH]
