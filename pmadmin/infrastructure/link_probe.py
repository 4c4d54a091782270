"""Best-effort existence check for user-supplied links."""
from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

# Statuses that neither confirm nor deny the resource: the host hides it
# behind authentication or does not answer HEAD requests. They are treated
# like an opaque browser response, i.e. as "exists".
OPAQUE_STATUS_CODES = frozenset({401, 403, 405, 501})


def normalize_url(url: str) -> str:
    if url.startswith("http://") or url.startswith("https://"):
        return url
    return f"https://{url}"


def build_probe_url(url: str) -> httpx.URL | None:
    """Return the absolute URL to probe, or ``None`` when it cannot be built."""

    try:
        target = httpx.URL(normalize_url(url))
    except (httpx.InvalidURL, TypeError, ValueError):
        return None
    if not target.host:
        return None
    return target


def is_reachable_status(status_code: int) -> bool:
    return 200 <= status_code < 400 or status_code in OPAQUE_STATUS_CODES


async def probe_url(
    target: httpx.URL,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = 5.0,
) -> bool:
    """Send a single HEAD request to an already validated ``target``."""

    http_client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
    try:
        response = await http_client.head(target)
    except httpx.HTTPError as exc:
        logger.info("Reachability probe for %s failed: %s", target, exc)
        return False
    finally:
        if client is None:
            await http_client.aclose()

    logger.debug("Reachability probe for %s -> %s", target, response.status_code)
    return is_reachable_status(response.status_code)


async def check_url_exists(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = 5.0,
) -> bool:
    """Probe ``url`` with a single HEAD request.

    Malformed input returns ``False`` without touching the network, as does
    any transport failure. There is no retry.
    """

    target = build_probe_url(url)
    if target is None:
        logger.debug("Rejected malformed link %r", url)
        return False
    return await probe_url(target, client=client, timeout=timeout)
