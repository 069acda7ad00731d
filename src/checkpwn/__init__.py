"""
checkpwn - check Have I Been Pwned for breached accounts and passwords.

Passwords are checked with k-anonymity: only the first 5 characters of
their SHA-1 hash leave this system.

Usage:
    from checkpwn import Password, check_account, check_password

    with Password("qwerty") as password:
        check_password(password)

    check_account("your_account", "your_api_key")

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"

from checkpwn.client import (
    CHECKPWN_USER_AGENT,
    CheckpwnClient,
    check_account,
    check_password,
)
from checkpwn.errors import (
    BadResponseError,
    CheckpwnError,
    DecodingError,
    EmptyInputError,
    InvalidApiKeyError,
    MissingApiKeyError,
    NetworkError,
    StatusCodeError,
)
from checkpwn.password import Password

__all__ = [
    "CHECKPWN_USER_AGENT",
    "CheckpwnClient",
    "check_account",
    "check_password",
    "Password",
    "CheckpwnError",
    "StatusCodeError",
    "NetworkError",
    "DecodingError",
    "BadResponseError",
    "InvalidApiKeyError",
    "MissingApiKeyError",
    "EmptyInputError",
]
