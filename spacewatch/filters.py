from typing import Iterable, Sequence, Tuple

from .catalog import CatalogData, count_object
from .schemas import (
    CatalogQuery,
    FlatApproach,
    ObjectStatus,
    ObjectType,
    OrbitClass,
    OrbitCounts,
    SpaceObject,
    TypeCounts,
)

INACTIVE_STATUSES = (ObjectStatus.DECAYED, ObjectStatus.INACTIVE)


def by_type(objects: Iterable[SpaceObject], object_type: ObjectType) -> Tuple[SpaceObject, ...]:
    return tuple(o for o in objects if o.object_type is object_type)


def by_orbit_class(objects: Iterable[SpaceObject], orbit_class: OrbitClass) -> Tuple[SpaceObject, ...]:
    return tuple(o for o in objects if o.orbit_class is orbit_class)


def is_active(obj: SpaceObject) -> bool:
    return obj.decay_date is None and obj.status not in INACTIVE_STATUSES


def active_only(objects: Iterable[SpaceObject]) -> Tuple[SpaceObject, ...]:
    return tuple(o for o in objects if is_active(o))


def by_country(objects: Iterable[SpaceObject], country: str) -> Tuple[SpaceObject, ...]:
    return tuple(o for o in objects if o.country == country)


def tally(objects: Iterable[SpaceObject]) -> Tuple[TypeCounts, OrbitCounts]:
    by_type_counts = TypeCounts()
    by_orbit_counts = OrbitCounts()
    for obj in objects:
        count_object(obj, by_type_counts, by_orbit_counts)
    return by_type_counts, by_orbit_counts


def apply(objects: Sequence[SpaceObject], query: CatalogQuery) -> CatalogData:
    """Intersect every filter the query asks for and recount the survivors."""
    selected = tuple(objects)
    if query.object_type is not None:
        selected = by_type(selected, query.object_type)
    if query.orbit_class is not None:
        selected = by_orbit_class(selected, query.orbit_class)
    if query.active_only:
        selected = active_only(selected)
    if query.country:
        selected = by_country(selected, query.country)
    counts_by_type, counts_by_orbit = tally(selected)
    return CatalogData(selected, counts_by_type, counts_by_orbit)


def hazardous_only(approaches: Iterable[FlatApproach]) -> Tuple[FlatApproach, ...]:
    return tuple(a for a in approaches if a.is_potentially_hazardous)
