import logging
import os
from typing import Optional
from urllib.parse import quote

import httpx

from .config import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    NASA_API_KEY,
    NEOWS_API_URL,
    NEOWS_TIMEOUT_SECONDS,
    SPACETRACK_BASE_URL,
    SPACETRACK_PASSWORD,
    SPACETRACK_USERNAME,
    UPSTREAM_TIMEOUT_SECONDS,
)
from .results import Failure, FailureKind, Outcome, Success
from .schemas import ApproachQuery, CatalogQuery, ObjectType

logger = logging.getLogger(__name__)

LOGIN_URL = f"{SPACETRACK_BASE_URL}/ajaxauth/login"
SATCAT_URL = f"{SPACETRACK_BASE_URL}/basicspacedata/query/class/satcat"

# SATCAT spells object types differently from our enum
SATCAT_TYPE_NAMES = {
    ObjectType.PAYLOAD: "PAYLOAD",
    ObjectType.ROCKET_BODY: "ROCKET BODY",
    ObjectType.DEBRIS: "DEBRIS",
}


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(MAX_LIMIT, int(limit)))


def build_satcat_url(query: CatalogQuery) -> str:
    """Build the SATCAT query path for the predicates the feed can apply itself."""

    predicates = []
    raw_type = SATCAT_TYPE_NAMES.get(query.object_type)
    if raw_type:
        predicates.append(f"OBJECT_TYPE/{quote(raw_type)}")
    if query.country:
        predicates.append(f"COUNTRY/{quote(query.country, safe='')}")
    if query.active_only:
        predicates.append("DECAY_DATE/null-val")
    predicates.append(f"limit/{clamp_limit(query.limit)}")
    predicates.append("format/json")
    return f"{SATCAT_URL}/{'/'.join(predicates)}"


def _fail(feed: str, kind: FailureKind, message: str) -> Failure:
    logger.warning("%s request failed [%s]: %s", feed, kind.value, message)
    return Failure(kind=kind, message=message)


def _login_rejected(resp: httpx.Response) -> bool:
    if resp.status_code in (401, 403):
        return True
    try:
        body = resp.json()
    except ValueError:
        return False
    return isinstance(body, dict) and body.get("Login") == "Failed"


def _session(timeout: float) -> httpx.Client:
    return httpx.Client(timeout=timeout, follow_redirects=True)


def fetch_satcat(query: CatalogQuery, timeout: Optional[float] = None) -> Outcome:
    """Fetch raw SATCAT records from Space-Track.

    Credentials are checked before anything goes over the wire. The call is
    made once; there is no retry.
    """

    username = os.getenv("SPACETRACK_USERNAME", SPACETRACK_USERNAME)
    password = os.getenv("SPACETRACK_PASSWORD", SPACETRACK_PASSWORD)
    if not username or not password:
        return _fail(
            "Space-Track",
            FailureKind.UNAUTHENTICATED,
            "SPACETRACK_USERNAME and/or SPACETRACK_PASSWORD not configured",
        )

    url = build_satcat_url(query)
    try:
        with _session(timeout or UPSTREAM_TIMEOUT_SECONDS) as client:
            login = client.post(
                LOGIN_URL, data={"identity": username, "password": password}
            )
            if _login_rejected(login):
                return _fail(
                    "Space-Track",
                    FailureKind.UNAUTHENTICATED,
                    f"login rejected with status {login.status_code}",
                )
            login.raise_for_status()
            resp = client.get(url)
            if resp.status_code in (401, 403):
                return _fail(
                    "Space-Track",
                    FailureKind.UNAUTHENTICATED,
                    f"query rejected with status {resp.status_code}",
                )
            resp.raise_for_status()
    except httpx.TimeoutException:
        return _fail("Space-Track", FailureKind.UPSTREAM_UNAVAILABLE, "request timed out")
    except httpx.HTTPStatusError as exc:
        return _fail(
            "Space-Track",
            FailureKind.UPSTREAM_UNAVAILABLE,
            f"status {exc.response.status_code}",
        )
    except httpx.HTTPError as exc:
        return _fail("Space-Track", FailureKind.UPSTREAM_UNAVAILABLE, str(exc) or type(exc).__name__)

    try:
        data = resp.json()
    except ValueError:
        return _fail("Space-Track", FailureKind.MALFORMED_RESPONSE, "body is not JSON")
    if not isinstance(data, list):
        return _fail("Space-Track", FailureKind.MALFORMED_RESPONSE, "body is not a list")

    logger.info("Fetched %d SATCAT records from Space-Track", len(data))
    return Success(payload=data)


def fetch_neo_feed(query: ApproachQuery, timeout: Optional[float] = None) -> Outcome:
    """Fetch the NeoWs close-approach feed for the query's date range."""

    params = {
        "start_date": query.start_date.isoformat(),
        "end_date": query.end_date.isoformat(),
        "api_key": os.getenv("NASA_API_KEY", NASA_API_KEY) or "DEMO_KEY",
    }

    try:
        resp = httpx.get(NEOWS_API_URL, params=params, timeout=timeout or NEOWS_TIMEOUT_SECONDS)
    except httpx.TimeoutException:
        return _fail("NeoWs", FailureKind.UPSTREAM_UNAVAILABLE, "request timed out")
    except httpx.HTTPError as exc:
        return _fail("NeoWs", FailureKind.UPSTREAM_UNAVAILABLE, str(exc) or type(exc).__name__)

    if resp.status_code in (401, 403):
        return _fail("NeoWs", FailureKind.UNAUTHENTICATED, "NASA API key is invalid or unauthorized")
    if resp.status_code == 429:
        return _fail("NeoWs", FailureKind.UPSTREAM_UNAVAILABLE, "rate limit exceeded")
    if not resp.is_success:
        return _fail("NeoWs", FailureKind.UPSTREAM_UNAVAILABLE, f"status {resp.status_code}")

    try:
        data = resp.json()
    except ValueError:
        return _fail("NeoWs", FailureKind.MALFORMED_RESPONSE, "body is not JSON")
    if not isinstance(data, dict) or not isinstance(data.get("near_earth_objects"), dict):
        return _fail("NeoWs", FailureKind.MALFORMED_RESPONSE, "near_earth_objects missing")

    return Success(payload=data)
