import logging

from prometheus_client import Counter

from . import mock_data
from .approaches import NeoData
from .catalog import CatalogData
from .results import Failure, Outcome
from .schemas import ApproachEnvelope, CatalogEnvelope, DateRange

logger = logging.getLogger(__name__)

FALLBACK_COUNT = Counter(
    "upstream_fallback_total",
    "Responses served from the offline dataset",
    ["feed", "kind"],
)


def catalog_envelope(data: CatalogData, fetched_at: int, **extra) -> CatalogEnvelope:
    return CatalogEnvelope(
        objects=list(data.objects),
        count=len(data.objects),
        counts_by_type=data.counts_by_type.model_copy(),
        counts_by_orbit=data.counts_by_orbit.model_copy(),
        fetched_at=fetched_at,
        **extra,
    )


def approach_envelope(data: NeoData, approaches, fetched_at: int, **extra) -> ApproachEnvelope:
    approaches = list(approaches)
    return ApproachEnvelope(
        approaches=approaches,
        asteroids=list(data.asteroids),
        events=list(data.events),
        count=len(approaches),
        hazardous_count=sum(1 for a in approaches if a.is_potentially_hazardous),
        date_range=DateRange(start=data.date_range.start, end=data.date_range.end),
        fetched_at=fetched_at,
        **extra,
    )


def _substitution(feed: str, failure: Failure) -> dict:
    FALLBACK_COUNT.labels(feed=feed, kind=failure.kind.value).inc()
    logger.warning("Serving mock %s data v%s: %s", feed, mock_data.DATASET_VERSION, failure.describe())
    return {
        "is_mock": True,
        "warning": f"{failure.describe()}. Using mock data.",
        "error_code": failure.kind.value,
        "dataset_version": mock_data.DATASET_VERSION,
    }


def resolve_catalog(outcome: Outcome, fetched_at: int) -> CatalogEnvelope:
    """Live envelope for a successful stage, the fixed catalog otherwise.

    ``outcome`` carries a ``CatalogData`` payload on success.
    """
    if isinstance(outcome, Failure):
        return catalog_envelope(mock_data.CATALOG, fetched_at, **_substitution("catalog", outcome))
    return catalog_envelope(outcome.payload, fetched_at)


def resolve_approaches(outcome: Outcome, fetched_at: int) -> ApproachEnvelope:
    """Same rule for the close-approach feed; success carries ``(NeoData, approaches)``."""
    if isinstance(outcome, Failure):
        return approach_envelope(
            mock_data.NEO,
            mock_data.NEO_APPROACHES,
            fetched_at,
            **_substitution("neo", outcome),
        )
    data, approaches = outcome.payload
    return approach_envelope(data, approaches, fetched_at)
