"""
Have I Been Pwned API client.

Implements the two checks checkpwn performs:
- Account lookups against the breach and paste databases
- Password lookups with k-anonymity against Pwned Passwords

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import time

import httpx

from checkpwn import api
from checkpwn.api import CheckKind
from checkpwn.errors import DecodingError, EmptyInputError, StatusCodeError
from checkpwn.password import Password

logger = logging.getLogger(__name__)

# The checkpwn User-Agent sent to HIBP
CHECKPWN_USER_AGENT = "checkpwn - cargo utility tool for hibp"


class CheckpwnClient:
    """Synchronous client for the HIBP account and password APIs.

    Requests are sequential and never retried. A request that gets no
    response raises NetworkError; the caller owns any retry policy.
    """

    # HIBP allows one request per 1500 ms, 100 ms added as buffer
    DEFAULT_ACCOUNT_DELAY = 1.6
    DEFAULT_CONNECT_TIMEOUT = 10.0
    DEFAULT_READ_TIMEOUT = 30.0

    def __init__(
        self,
        api_key: str | None = None,
        user_agent: str = CHECKPWN_USER_AGENT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        account_delay: float = DEFAULT_ACCOUNT_DELAY,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Initialize checkpwn client.

        Args:
            api_key: HIBP API key (required for account lookups)
            user_agent: User-Agent header for requests
            connect_timeout: Seconds allowed to establish a connection
            read_timeout: Seconds allowed for reads, writes and pool waits
            account_delay: Seconds to sleep before each account check
            transport: Optional httpx transport for the owned client
            http_client: Use this client instead of creating one
        """
        self.api_key = api_key
        self.user_agent = user_agent
        self.account_delay = account_delay
        self.timeout = httpx.Timeout(read_timeout, connect=connect_timeout)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=self.timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "CheckpwnClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _get(self, url: str, headers: dict[str, str]) -> httpx.Response | httpx.RequestError:
        """Send a GET and return the response, or the httpx request error."""
        request_headers = {"User-Agent": self.user_agent}
        request_headers.update(headers)

        logger.debug("GET %s", url)
        try:
            return self._client.get(url, headers=request_headers, timeout=self.timeout)
        except httpx.RequestError as e:
            logger.debug("Request to %s failed: %s", url, e)
            return e

    # =========================================================================
    # Account Checking
    # =========================================================================

    def check_account(self, account: str, api_key: str | None = None) -> bool:
        """Check an account on both the breach and paste databases.

        Sleeps account_delay seconds before the first request to stay
        within HIBP's rate limit.

        Args:
            account: Email address or username
            api_key: HIBP API key, defaults to the client's key

        Returns:
            True if the account is breached

        Raises:
            EmptyInputError: If account or API key is empty
            NetworkError: If either request got no response
            InvalidApiKeyError: If HIBP rejected the API key
            BadResponseError: If HIBP rejected the account
        """
        if api_key is None:
            api_key = self.api_key
        if not account or not api_key:
            raise EmptyInputError()

        time.sleep(self.account_delay)

        headers = {"hibp-api-key": api_key}
        acc_route = api.arg_to_api_route(CheckKind.ACCOUNT, account)
        paste_route = api.arg_to_api_route(CheckKind.PASTE, account)

        acc_stat = api.response_to_status_code(self._get(acc_route, headers))
        paste_stat = api.response_to_status_code(self._get(paste_route, headers))
        logger.debug("Account status %d, paste status %d", acc_stat, paste_stat)

        return api.evaluate_acc_breach_statuscodes(acc_stat, paste_stat)

    # =========================================================================
    # Password Checking (K-Anonymity)
    # =========================================================================

    def check_password(self, password: Password) -> bool:
        """Check a password against Pwned Passwords.

        Only the first 5 characters of the SHA-1 digest are sent. Padding
        is requested so the response size does not reveal the prefix.

        Args:
            password: Hashed password wrapper

        Returns:
            True if the password is breached

        Raises:
            NetworkError: If the request got no response
            DecodingError: If the response body is not UTF-8
            StatusCodeError: If a match came with an unexpected status
        """
        digest = password.hash
        route = api.arg_to_api_route(CheckKind.PASSWORD, digest)

        response = self._get(route, {"Add-Padding": "true"})
        request_status = api.response_to_status_code(response)

        try:
            body = response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodingError() from e

        if not api.search_in_range(body, digest):
            return False

        if request_status == 200:
            return True
        if request_status == 404:
            return False
        raise StatusCodeError(f"Unrecognized status code received: {request_status}")


def check_account(account: str, api_key: str) -> bool:
    """Check an account with a one-off client.

    Args:
        account: Email address or username
        api_key: HIBP API key

    Returns:
        True if the account is breached
    """
    if not account or not api_key:
        raise EmptyInputError()

    with CheckpwnClient(api_key=api_key) as client:
        return client.check_account(account)


def check_password(password: Password) -> bool:
    """Check a password with a one-off client.

    Args:
        password: Hashed password wrapper

    Returns:
        True if the password is breached
    """
    with CheckpwnClient() as client:
        return client.check_password(password)
