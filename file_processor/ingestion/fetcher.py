"""
Remote fetcher - retrieves the HTML of a web page with a single GET.
Requires: requests
"""

import logging
from typing import Optional

import requests

from file_processor.core.errors import ExtractionTimeoutError, FetchError

DEFAULT_TIMEOUT_SECONDS = 10.0


def fetch_html(
    url: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    logger: Optional[logging.Logger] = None
) -> str:
    """
    Fetch a URL and return the response body as text.

    One request, no retry; redirects follow the requests default.

    Args:
        url: Absolute http(s) URL
        timeout: Connect/read timeout in seconds
        logger: Optional logger for diagnostics

    Returns:
        Response body decoded as text

    Raises:
        FetchError: Invalid URL, network failure or non-2xx status
        ExtractionTimeoutError: The server did not answer within ``timeout``
    """
    logger = logger or logging.getLogger(__name__)
    logger.info(f"Fetching URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.Timeout as e:
        logger.error(f"Fetch timed out after {timeout}s: {url}")
        raise ExtractionTimeoutError(
            "Failed to process the URL.",
            details=f"Request timed out after {timeout}s: {str(e)}"
        ) from e
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        logger.error(f"Fetch failed with HTTP {status}: {url}")
        raise FetchError("Failed to process the URL.", details=str(e)) from e
    except requests.RequestException as e:
        logger.error(f"Fetch failed for {url}: {str(e)}")
        raise FetchError("Failed to process the URL.", details=str(e)) from e

    logger.info(
        f"Fetched {url} - status {response.status_code}, "
        f"{len(response.content)} bytes"
    )
    return response.text
