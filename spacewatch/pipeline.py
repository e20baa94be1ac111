"""Entry point for callers: validate, fetch, normalize, filter, envelope.

Only ``InvalidQuery`` escapes from here. Every upstream problem ends as a
mock-substituted envelope produced by the fallback policy.
"""

import time
from datetime import date, datetime, timezone
from typing import Callable, Optional

from . import approaches, catalog, filters, services
from .config import DEFAULT_LIMIT, MAX_RANGE_DAYS
from .fallback import resolve_approaches, resolve_catalog
from .results import InvalidQuery, Outcome, Success
from .schemas import (
    ApproachEnvelope,
    ApproachQuery,
    CatalogEnvelope,
    CatalogQuery,
    DateRange,
    ObjectType,
    OrbitClass,
)


def epoch_millis() -> int:
    return int(time.time() * 1000)


def _enum_value(enum_cls, value: Optional[str], label: str):
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise InvalidQuery(f"Invalid {label}. Valid options: {valid}")


def parse_flag(value: Optional[str], label: str) -> bool:
    if value is None or value == "":
        return False
    lowered = value.lower()
    if lowered in {"true", "1"}:
        return True
    if lowered in {"false", "0"}:
        return False
    raise InvalidQuery(f"Invalid {label}. Valid options: true, false")


def parse_catalog_query(
    object_type: Optional[str] = None,
    country: Optional[str] = None,
    active: Optional[str] = None,
    orbit: Optional[str] = None,
    limit: Optional[int] = None,
) -> CatalogQuery:
    return CatalogQuery(
        object_type=_enum_value(ObjectType, object_type, "type"),
        country=country or None,
        active_only=parse_flag(active, "active"),
        orbit_class=_enum_value(OrbitClass, orbit, "orbit"),
        limit=services.clamp_limit(DEFAULT_LIMIT if limit is None else limit),
    )


def _parse_day(value: Optional[str], label: str, default: date) -> date:
    if not value:
        return default
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidQuery(f"Invalid {label} date. Expected YYYY-MM-DD")


def parse_approach_query(
    start: Optional[str] = None,
    end: Optional[str] = None,
    hazardous: Optional[str] = None,
    today: Optional[date] = None,
) -> ApproachQuery:
    today = today or datetime.now(timezone.utc).date()
    start_date = _parse_day(start, "start", today)
    end_date = _parse_day(end, "end", start_date)
    span = (end_date - start_date).days
    if span < 0:
        raise InvalidQuery("End date must not be before start date")
    if span > MAX_RANGE_DAYS:
        raise InvalidQuery(f"Date range exceeds maximum of {MAX_RANGE_DAYS} days")
    return ApproachQuery(
        start_date=start_date,
        end_date=end_date,
        hazardous_only=parse_flag(hazardous, "hazardous"),
    )


def get_catalog(
    query: CatalogQuery,
    fetch: Optional[Callable[[CatalogQuery], Outcome]] = None,
    clock: Callable[[], int] = epoch_millis,
) -> CatalogEnvelope:
    outcome = (fetch or services.fetch_satcat)(query)
    if isinstance(outcome, Success):
        normalized = catalog.normalize_satcat(outcome.payload)
        outcome = Success(payload=filters.apply(normalized.objects, query))
    return resolve_catalog(outcome, clock())


def get_approaches(
    query: ApproachQuery,
    fetch: Optional[Callable[[ApproachQuery], Outcome]] = None,
    clock: Callable[[], int] = epoch_millis,
) -> ApproachEnvelope:
    outcome = (fetch or services.fetch_neo_feed)(query)
    if isinstance(outcome, Success):
        requested = DateRange(start=query.start_date.isoformat(), end=query.end_date.isoformat())
        data = approaches.normalize_feed(outcome.payload, default_range=requested)
        flat = approaches.flatten(data.asteroids, data.events)
        if query.hazardous_only:
            flat = filters.hazardous_only(flat)
        outcome = Success(payload=(data, flat))
    return resolve_approaches(outcome, clock())
