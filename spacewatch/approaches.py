"""NeoWs feed normalization and the flattened dashboard view."""

import logging
from datetime import datetime, time, timezone
from typing import Any, Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Tuple

from . import risk
from .catalog import parse_date, parse_numeric
from .schemas import ApproachEvent, Asteroid, DateRange, FlatApproach

logger = logging.getLogger(__name__)

KPH_PER_KM_S = 3600
MAX_DISTANCE_KM = 1e12
MAX_VELOCITY_KM_S = 1e4
MAX_DIAMETER_KM = 1e4
# last millisecond representable as a datetime (9999-12-31T23:59:59.999Z)
MAX_EPOCH_MS = 253_402_300_799_999.0


class NeoData(NamedTuple):
    asteroids: Tuple[Asteroid, ...]
    events: Tuple[ApproachEvent, ...]
    element_count: int
    date_range: DateRange


def _nested(record: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(record, Mapping):
            return None
        record = record.get(key)
    return record


def normalize_asteroid(raw: Mapping[str, Any]) -> Optional[Asteroid]:
    asteroid_id = raw.get("neo_reference_id") or raw.get("id")
    name = raw.get("name")
    low = parse_numeric(
        _nested(raw, "estimated_diameter", "kilometers", "estimated_diameter_min"), 0.0, MAX_DIAMETER_KM
    )
    high = parse_numeric(
        _nested(raw, "estimated_diameter", "kilometers", "estimated_diameter_max"), 0.0, MAX_DIAMETER_KM
    )
    if not asteroid_id or not name or low is None or high is None:
        return None
    designation = raw.get("designation")
    return Asteroid(
        id=str(asteroid_id),
        name=str(name),
        designation=str(designation) if designation else None,
        diameter_min_km=low,
        diameter_max_km=high,
        hazardous=raw.get("is_potentially_hazardous_asteroid") is True,
        sentry=raw.get("is_sentry_object") is True,
    )


def _timestamp(raw: Mapping[str, Any], approach_date: str) -> Optional[int]:
    epoch = parse_numeric(raw.get("epoch_date_close_approach"), -MAX_EPOCH_MS, MAX_EPOCH_MS)
    if epoch is not None:
        return int(epoch)
    day = parse_date(approach_date)
    if day is None:
        return None
    return int(datetime.combine(day, time(), tzinfo=timezone.utc).timestamp() * 1000)


def normalize_event(asteroid_id: str, raw: Mapping[str, Any]) -> Optional[ApproachEvent]:
    """One Earth close approach; None when a required field is unusable."""
    approach_date = raw.get("close_approach_date")
    if not isinstance(approach_date, str):
        return None
    timestamp = _timestamp(raw, approach_date)
    miss = parse_numeric(_nested(raw, "miss_distance", "kilometers"), 0.0, MAX_DISTANCE_KM)
    velocity = parse_numeric(
        _nested(raw, "relative_velocity", "kilometers_per_second"), 0.0, MAX_VELOCITY_KM_S
    )
    if timestamp is None or miss is None or velocity is None:
        return None
    return ApproachEvent(
        asteroid_id=asteroid_id,
        approach_date=approach_date,
        approach_timestamp=timestamp,
        relative_velocity_km_s=velocity,
        miss_distance_km=miss,
        orbiting_body="Earth",
    )


def resolve_events(
    asteroids: Iterable[Asteroid], events: Iterable[ApproachEvent]
) -> Iterator[Tuple[ApproachEvent, Asteroid]]:
    """Pair each event with its asteroid, dropping events whose asteroid is absent."""
    by_id = {a.id: a for a in asteroids}
    for event in events:
        asteroid = by_id.get(event.asteroid_id)
        if asteroid is None:
            logger.warning("Dropping close approach for unknown asteroid %s", event.asteroid_id)
            continue
        yield event, asteroid


def normalize_feed(payload: Mapping[str, Any], default_range: Optional[DateRange] = None) -> NeoData:
    asteroids: Dict[str, Asteroid] = {}
    events: List[ApproachEvent] = []
    by_date = payload.get("near_earth_objects") if isinstance(payload, Mapping) else None
    if not isinstance(by_date, Mapping):
        logger.warning("NeoWs payload has no near_earth_objects mapping")
        by_date = {}

    for date_key in sorted(by_date):
        records = by_date[date_key]
        if not isinstance(records, list):
            logger.warning("Skipping NeoWs date %s: not a list", date_key)
            continue
        for raw in records:
            if not isinstance(raw, Mapping):
                logger.warning("Skipping NeoWs record on %s: not an object", date_key)
                continue
            asteroid = normalize_asteroid(raw)
            if asteroid is None:
                logger.warning("Skipping malformed NeoWs asteroid %r", raw.get("id"))
            elif asteroid.id not in asteroids:
                asteroids[asteroid.id] = asteroid

            asteroid_id = str(raw.get("neo_reference_id") or raw.get("id") or "")
            close_approaches = raw.get("close_approach_data") or []
            if not isinstance(close_approaches, list):
                logger.warning("Skipping close approaches for asteroid %s: not a list", asteroid_id)
                continue
            for approach in close_approaches:
                if not isinstance(approach, Mapping) or approach.get("orbiting_body") != "Earth":
                    continue
                event = normalize_event(asteroid_id, approach)
                if event is None:
                    logger.warning("Skipping malformed close approach for asteroid %s", asteroid_id)
                    continue
                events.append(event)

    events.sort(key=lambda e: e.approach_timestamp)
    linked = tuple(event for event, _ in resolve_events(asteroids.values(), events))

    if by_date:
        dates = sorted(by_date)
        date_range = DateRange(start=dates[0], end=dates[-1])
    else:
        today = datetime.now(timezone.utc).date().isoformat()
        date_range = default_range or DateRange(start=today, end=today)

    element_count = payload.get("element_count") if isinstance(payload, Mapping) else None
    if not isinstance(element_count, int) or isinstance(element_count, bool):
        element_count = len(linked)

    return NeoData(tuple(asteroids.values()), linked, element_count, date_range)


def flatten(
    asteroids: Iterable[Asteroid],
    events: Iterable[ApproachEvent],
    bands: risk.RiskBands = risk.RISK_BANDS,
) -> List[FlatApproach]:
    """Join events to their asteroids and attach per-audience risk tiers."""
    flat = []
    for event, asteroid in resolve_events(asteroids, events):
        velocity_kph = event.relative_velocity_km_s * KPH_PER_KM_S
        tiers = risk.classify(event.miss_distance_km, asteroid.hazardous, bands)
        points, severity = risk.score(
            asteroid.size_km, velocity_kph, event.miss_distance_km, asteroid.hazardous
        )
        flat.append(
            FlatApproach(
                id=asteroid.id,
                name=asteroid.name,
                size_km=asteroid.size_km,
                velocity_km_s=event.relative_velocity_km_s,
                velocity_kph=velocity_kph,
                miss_distance_km=event.miss_distance_km,
                approach_date=event.approach_date,
                approach_timestamp=event.approach_timestamp,
                is_potentially_hazardous=asteroid.hazardous,
                risk_earth=tiers.earth,
                risk_human=tiers.human,
                risk_iss=tiers.iss,
                risk_satellites=tiers.satellites,
                risk_score=points,
                severity=severity,
            )
        )
    return flat
