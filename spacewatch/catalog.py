"""SATCAT normalization.

Turns loosely typed catalog records into ``SpaceObject`` models and counts
them by type and orbit class in the same pass. Orbit class is always derived
from apogee/perigee/period; an upstream orbit label is never trusted.
"""

import logging
import math
from datetime import date
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .schemas import (
    ObjectStatus,
    ObjectType,
    OrbitClass,
    OrbitCounts,
    RcsSize,
    SpaceObject,
    TypeCounts,
)

logger = logging.getLogger(__name__)

SATCAT_SOURCE = "Space-Track SATCAT"

MAX_ALTITUDE_KM = 1_000_000.0
MAX_PERIOD_MINUTES = 1_000_000.0


class OrbitBands(NamedTuple):
    leo_max_apogee_km: float = 2000.0
    meo_max_apogee_km: float = 35000.0
    geo_altitude_km: float = 35786.0
    geo_tolerance_km: float = 200.0
    geo_period_range: Tuple[float, float] = (1400.0, 1500.0)
    # apogee/perigee spread, as a fraction of mean altitude, above which the orbit is HEO
    heo_spread_ratio: float = 0.5


ORBIT_BANDS = OrbitBands()


class CatalogData(NamedTuple):
    objects: Tuple[SpaceObject, ...]
    counts_by_type: TypeCounts
    counts_by_orbit: OrbitCounts


def _upper_keys(record: Mapping[Any, Any]) -> dict:
    return {str(k).upper(): v for k, v in record.items()}


def _field(upper: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        value = upper.get(name)
        if value is not None and value != "":
            return value
    return None


def parse_numeric(value: Any, low: float, high: float) -> Optional[float]:
    """Parse a number, returning None for anything non-numeric or out of bounds."""
    if value is None or isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(num) or num < low or num > high:
        return None
    return num


def parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def normalize_object_type(raw: Any) -> ObjectType:
    text = str(raw or "").strip().upper()
    if text == "PAYLOAD":
        return ObjectType.PAYLOAD
    if text in ("ROCKET BODY", "ROCKET_BODY", "R/B"):
        return ObjectType.ROCKET_BODY
    if text in ("DEBRIS", "DEB"):
        return ObjectType.DEBRIS
    return ObjectType.UNKNOWN


def classify_orbit(
    apogee: Optional[float],
    perigee: Optional[float],
    period: Optional[float],
    bands: OrbitBands = ORBIT_BANDS,
) -> OrbitClass:
    if apogee is None or perigee is None:
        return OrbitClass.UNKNOWN

    mean_altitude = (apogee + perigee) / 2
    if apogee - perigee > mean_altitude * bands.heo_spread_ratio:
        return OrbitClass.HEO

    low, high = bands.geo_period_range
    if period is not None and low < period < high:
        return OrbitClass.GEO
    if (
        abs(apogee - bands.geo_altitude_km) <= bands.geo_tolerance_km
        and abs(perigee - bands.geo_altitude_km) <= bands.geo_tolerance_km
    ):
        return OrbitClass.GEO

    if apogee < bands.leo_max_apogee_km:
        return OrbitClass.LEO
    if apogee < bands.meo_max_apogee_km:
        return OrbitClass.MEO
    return OrbitClass.UNKNOWN


def determine_status(decay_date: Optional[date], current_status: Any) -> ObjectStatus:
    """Lifecycle status; a decay date always wins over the status text."""
    if decay_date is not None:
        return ObjectStatus.DECAYED
    if current_status is None:
        return ObjectStatus.ACTIVE

    text = str(current_status).strip().upper()
    if "DECAY" in text:
        return ObjectStatus.DECAYED
    # checked before ACTIVE, which is a substring of INACTIVE
    if any(word in text for word in ("INACTIVE", "DEFUNCT", "NONOPERATIONAL")):
        return ObjectStatus.INACTIVE
    if "ACTIVE" in text or "OPERATIONAL" in text:
        return ObjectStatus.ACTIVE
    return ObjectStatus.UNKNOWN


def _rcs_size(raw: Any) -> Optional[RcsSize]:
    try:
        return RcsSize(str(raw).strip().upper())
    except ValueError:
        return None


def _norad_id(raw: Any) -> Optional[int]:
    try:
        norad_id = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return norad_id if norad_id > 0 else None


def normalize_record(
    record: Mapping[str, Any],
    source: str = SATCAT_SOURCE,
    bands: OrbitBands = ORBIT_BANDS,
) -> Optional[SpaceObject]:
    fields = _upper_keys(record)
    norad_id = _norad_id(_field(fields, "NORAD_CAT_ID", "NORAD_ID", "CATALOG_NUMBER"))
    if norad_id is None:
        return None

    apogee = parse_numeric(_field(fields, "APOGEE", "APOGEE_KM"), 0.0, MAX_ALTITUDE_KM)
    perigee = parse_numeric(_field(fields, "PERIGEE", "PERIGEE_KM"), 0.0, MAX_ALTITUDE_KM)
    period = parse_numeric(_field(fields, "PERIOD", "PERIOD_MINUTES"), 0.0, MAX_PERIOD_MINUTES)
    if period == 0.0:
        period = None
    decay_date = parse_date(_field(fields, "DECAY_DATE", "DECAY"))
    country = _field(fields, "COUNTRY", "COUNTRY_CODE", "OWNER")
    object_id = _field(fields, "OBJECT_ID", "INTLDES")
    name = _field(fields, "OBJECT_NAME", "SATNAME", "NAME")

    return SpaceObject(
        norad_id=norad_id,
        name=str(name).strip() if name is not None else f"NORAD {norad_id}",
        object_id=str(object_id) if object_id is not None else None,
        object_type=normalize_object_type(_field(fields, "OBJECT_TYPE")),
        country=str(country).strip() if country is not None else None,
        launch_date=parse_date(_field(fields, "LAUNCH_DATE", "LAUNCH")),
        decay_date=decay_date,
        inclination_deg=parse_numeric(_field(fields, "INCLINATION"), 0.0, 180.0),
        period_minutes=period,
        apogee_km=apogee,
        perigee_km=perigee,
        orbit_class=classify_orbit(apogee, perigee, period, bands),
        status=determine_status(decay_date, _field(fields, "CURRENT_STATUS", "STATUS")),
        rcs_size=_rcs_size(_field(fields, "RCS_SIZE")),
        source=source,
    )


def count_object(obj: SpaceObject, by_type: TypeCounts, by_orbit: OrbitCounts) -> None:
    type_key = obj.object_type.value.lower()
    orbit_key = obj.orbit_class.value.lower()
    setattr(by_type, type_key, getattr(by_type, type_key) + 1)
    setattr(by_orbit, orbit_key, getattr(by_orbit, orbit_key) + 1)


def normalize_satcat(
    records: Sequence[Any],
    source: str = SATCAT_SOURCE,
    bands: OrbitBands = ORBIT_BANDS,
) -> CatalogData:
    objects: List[SpaceObject] = []
    seen = set()
    by_type = TypeCounts()
    by_orbit = OrbitCounts()
    if not isinstance(records, (list, tuple)):
        logger.warning("SATCAT payload is not a list of records")
        records = ()

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            logger.warning("Skipping SATCAT record %d: not an object", index)
            continue
        obj = normalize_record(record, source, bands)
        if obj is None:
            logger.warning("Skipping SATCAT record %d: missing or invalid NORAD id", index)
            continue
        if obj.norad_id in seen:
            logger.warning("Skipping duplicate SATCAT record for NORAD %d", obj.norad_id)
            continue
        seen.add(obj.norad_id)
        objects.append(obj)
        count_object(obj, by_type, by_orbit)

    return CatalogData(tuple(objects), by_type, by_orbit)
