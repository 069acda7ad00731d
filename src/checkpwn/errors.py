"""
Exceptions raised while checking accounts and passwords against HIBP.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class CheckpwnError(Exception):
    """Base class for all checkpwn errors."""

    default_message = "Unknown checkpwn error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class StatusCodeError(CheckpwnError):
    """An HTTP status could not be reconciled with the local match outcome."""

    default_message = "Unrecognized status code received"


class NetworkError(CheckpwnError):
    """No HTTP response was obtained (DNS, connect, timeout)."""

    default_message = "Failed to send request to HIBP"


class DecodingError(CheckpwnError):
    """Response body could not be decoded."""

    default_message = "Failed to decode response from HIBP"


class BadResponseError(CheckpwnError):
    default_message = "Received a bad response from HIBP - make sure the account is valid"


class InvalidApiKeyError(CheckpwnError):
    default_message = "HIBP deemed the current API key invalid"


class MissingApiKeyError(CheckpwnError):
    default_message = "The API key is missing"


class EmptyInputError(CheckpwnError, ValueError):
    """Required text input was empty."""

    default_message = "Empty input that should NOT be empty"
