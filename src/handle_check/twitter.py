"""
X/Twitter user lookup client for handle-check.

Answers a single question for a handle: is there already an account with
this username?

API Documentation: https://developer.x.com/en/docs/x-api/users/lookup
"""

import logging
from typing import Any

import httpx

from .config import TwitterConfig
from .models import Availability
from .validation import normalize_handle

logger = logging.getLogger(__name__)

# Error title the lookup endpoint uses for an unknown username
NOT_FOUND_TITLE = "Not Found Error"


def parse_lookup_response(status_code: int, payload: Any) -> Availability:
    """
    Map a user lookup response to an availability result.

    A user record means the handle is taken and a "Not Found Error" entry
    means it is free. Anything else is ambiguous.
    """
    if not isinstance(payload, dict):
        return Availability.UNKNOWN

    data = payload.get("data")
    if isinstance(data, dict) and data.get("id"):
        return Availability.TAKEN

    errors = payload.get("errors")
    if isinstance(errors, list) and any(
        isinstance(err, dict) and err.get("title") == NOT_FOUND_TITLE for err in errors
    ):
        return Availability.AVAILABLE

    logger.warning(f"Unexpected user lookup response (HTTP {status_code}): {payload}")
    return Availability.UNKNOWN


class TwitterClient:
    """
    Client for the X/Twitter v2 user lookup endpoint.

    Authenticates with an app-only bearer token.
    """

    def __init__(
        self,
        api_base: str = "https://api.twitter.com",
        bearer_token: str | None = None,
        timeout_seconds: float = 10.0,
    ):
        """
        Initialize the lookup client.

        Args:
            api_base: API root, without the /2 version prefix
            bearer_token: App-only bearer token
            timeout_seconds: Request timeout in seconds
        """
        self.api_base = api_base.rstrip("/")
        self.bearer_token = bearer_token
        self.timeout = timeout_seconds

    @classmethod
    def from_config(cls, config: TwitterConfig) -> "TwitterClient":
        return cls(
            api_base=config.api_base,
            bearer_token=config.get_bearer_token(),
            timeout_seconds=config.timeout_seconds,
        )

    async def check_exists(self, handle: str) -> Availability:
        """
        Check whether an account already uses a handle.

        Args:
            handle: Handle with or without a leading '@'

        Returns:
            TAKEN if a user record exists, AVAILABLE if the API reports the
            user as not found, UNKNOWN for anything else
        """
        clean_handle = normalize_handle(handle)

        if not self.bearer_token:
            logger.warning(f"No bearer token configured, cannot check @{clean_handle}")
            return Availability.UNKNOWN

        url = f"{self.api_base}/2/users/by/username/{clean_handle}"
        logger.debug(f"Looking up @{clean_handle}")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    url,
                    headers={"Authorization": f"Bearer {self.bearer_token}"},
                )
            except httpx.HTTPError as e:
                logger.warning(f"HTTP error looking up @{clean_handle}: {e}")
                return Availability.UNKNOWN

        try:
            payload = response.json()
        except ValueError:
            logger.warning(
                f"Malformed lookup response for @{clean_handle} (HTTP {response.status_code})"
            )
            return Availability.UNKNOWN

        result = parse_lookup_response(response.status_code, payload)
        logger.debug(f"@{clean_handle} is {result.value}")
        return result
