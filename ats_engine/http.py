"""HTTP helpers used by the source adapters.

The normalization core never does I/O; only adapters call into this module.
Requests go through one ``httpx.Client`` per call (or a caller-supplied one),
and 429 responses are retried with exponential backoff.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional

import httpx
from bs4 import BeautifulSoup

from .config import settings
from .errors import PayloadError

logger = logging.getLogger(__name__)


def default_headers() -> Dict[str, str]:
    return {
        "Accept": "*/*",
        "Accept-Language": "en-US,en;q=0.9",
        "Content-Type": "application/json",
        "User-Agent": settings.user_agent,
    }


def _new_client() -> httpx.Client:
    return httpx.Client(timeout=settings.timeout_s, follow_redirects=True, headers=default_headers())


def _send(client: httpx.Client, method: str, url: str, **kwargs: Any) -> httpx.Response:
    retries = 0
    while True:
        logger.debug("%s %s", method, url)
        try:
            resp = client.request(method, url, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 429 and retries < settings.max_retries:
                sleep_s = settings.backoff_s * (2**retries)
                logger.info("Rate limited by %s, retrying in %.1fs", url, sleep_s)
                time.sleep(sleep_s)
                retries += 1
                continue
            logger.error("HTTP %s from %s", exc.response.status_code, url)
            raise


def request(method: str, url: str, client: Optional[httpx.Client] = None, **kwargs: Any) -> httpx.Response:
    if client is not None:
        return _send(client, method, url, **kwargs)
    with _new_client() as own:
        return _send(own, method, url, **kwargs)


def _decode_json(resp: httpx.Response, url: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise PayloadError(f"response from {url} is not valid JSON: {exc}") from exc


def get_json(url: str, client: Optional[httpx.Client] = None) -> Any:
    """GET ``url`` and decode the JSON body; a non-JSON body raises PayloadError."""
    return _decode_json(request("GET", url, client=client), url)


def post_json(url: str, payload: Any, client: Optional[httpx.Client] = None) -> Any:
    """POST ``payload`` as JSON to ``url`` and decode the JSON body."""
    return _decode_json(request("POST", url, client=client, json=payload), url)


def extract_ld_json(html: str) -> Dict[str, Any]:
    """Return the first JSON-LD object in ``html``, preferring a JobPosting.

    Returns an empty dict when the page carries no usable JSON-LD.
    """
    soup = BeautifulSoup(html, "html.parser")
    found: Dict[str, Any] = {}
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = script.get_text(strip=True)
        if not raw:
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Skipping malformed LD+JSON block: %s", exc)
            continue

        items = data if isinstance(data, list) else [data]
        for item in items:
            if not isinstance(item, dict):
                continue
            if item.get("@type") == "JobPosting":
                return item
            if not found:
                found = item
    return found


def get_ld_json(url: str, client: Optional[httpx.Client] = None) -> Dict[str, Any]:
    """Fetch an HTML page and extract its JSON-LD structured data."""
    return extract_ld_json(request("GET", url, client=client).text)
