"""
Have I Been Pwned route building and response evaluation.

Pure helpers shared by the client:
- SHA-1 hashing of passwords
- API route construction with k-anonymity truncation
- Range response scanning
- Status code evaluation for account and paste lookups

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import hashlib
from enum import Enum

import httpx

from checkpwn.errors import (
    BadResponseError,
    DecodingError,
    EmptyInputError,
    InvalidApiKeyError,
    NetworkError,
)

HIBP_API_BASE = "https://haveibeenpwned.com/api/v3"
PWNED_PASSWORDS_API = "https://api.pwnedpasswords.com"

# Length of the digest prefix sent to the range API
RANGE_PREFIX_LENGTH = 5

# Count value used by HIBP for padding rows
PADDING_COUNT = "0"

# (account status, paste status) -> verdict or error to raise.
# The account API accepts usernames, the paste API answers those with 400.
# Pairs not listed count as breached.
ACCOUNT_STATUS_TABLE: dict[tuple[int, int], bool | type[Exception]] = {
    (401, 401): InvalidApiKeyError,
    (404, 404): False,
    (404, 400): False,
    (400, 400): BadResponseError,
    (400, 404): BadResponseError,
    (400, 200): BadResponseError,
}


class CheckKind(str, Enum):
    """Kind of lookup, each backed by one HIBP endpoint."""

    ACCOUNT = "account"
    PASSWORD = "password"
    PASTE = "paste"

    def get_api_route(self, search_term: str) -> str:
        """Format the endpoint URL for this kind.

        Password routes only ever carry the first five characters of the
        digest, whatever the caller passes in.
        """
        if self is CheckKind.ACCOUNT:
            return f"{HIBP_API_BASE}/breachedaccount/{search_term}"
        if self is CheckKind.PASTE:
            return f"{HIBP_API_BASE}/pasteaccount/{search_term}"
        if len(search_term) < RANGE_PREFIX_LENGTH:
            raise ValueError(
                f"Password digest must be at least {RANGE_PREFIX_LENGTH} characters"
            )
        return f"{PWNED_PASSWORDS_API}/range/{search_term[:RANGE_PREFIX_LENGTH]}"


def hash_password(password: str) -> str:
    """Return the uppercase hex SHA-1 digest of a password.

    Uppercase matches the casing of the range API response, so suffixes
    can be compared directly.

    Raises:
        EmptyInputError: If password is empty
    """
    if not password:
        raise EmptyInputError()
    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()


def arg_to_api_route(kind: CheckKind, input_data: str) -> str:
    """Build the HIBP URL for a lookup.

    For CheckKind.PASSWORD, input_data must be the full digest. Only the
    first five characters are put in the URL.

    Args:
        kind: Lookup kind
        input_data: Account name/email, or the password digest

    Returns:
        Full request URL
    """
    return kind.get_api_route(input_data)


def search_in_range(password_range_response: str, hashed_key: str) -> bool:
    """Find the digest suffix in a range response.

    Each line of the response is ``SUFFIX:COUNT``. Rows with a count of 0
    are padding and never match. Comparison is exact and case-sensitive
    against everything after the 5-char prefix of hashed_key.
    """
    own_suffix = hashed_key[RANGE_PREFIX_LENGTH:]

    for line in password_range_response.splitlines():
        pair = line.split(":")
        if len(pair) != 2:
            continue

        suffix, count = pair
        if count == PADDING_COUNT:
            continue

        if suffix == own_suffix:
            return True

    return False


def response_to_status_code(response: httpx.Response | httpx.HTTPError) -> int:
    """Map the outcome of one request to its HTTP status code.

    An HTTP error response is still a status code. Only failures where no
    response was received become a NetworkError.

    Args:
        response: The httpx.Response, or the exception raised by the request

    Returns:
        HTTP status code

    Raises:
        DecodingError: If a response arrived but its body could not be decoded
        NetworkError: If no response was obtained
    """
    if isinstance(response, httpx.Response):
        return response.status_code
    if isinstance(response, httpx.HTTPStatusError):
        return response.response.status_code
    if isinstance(response, httpx.DecodingError):
        raise DecodingError() from response
    if isinstance(response, httpx.HTTPError):
        raise NetworkError() from response
    raise TypeError(f"Unsupported request outcome: {type(response).__name__}")


def evaluate_acc_breach_statuscodes(acc_stat: int, paste_stat: int) -> bool:
    """Combine account and paste endpoint statuses into a verdict.

    Returns:
        True if the account is considered breached

    Raises:
        InvalidApiKeyError: Both endpoints rejected the API key
        BadResponseError: The account endpoint rejected the request
    """
    outcome = ACCOUNT_STATUS_TABLE.get((acc_stat, paste_stat), True)
    if isinstance(outcome, bool):
        return outcome
    raise outcome()
