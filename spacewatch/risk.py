"""Heuristic risk tiers for close approaches.

These are display thresholds on upstream miss distances and velocities, not a
physical probability. Each audience has its own bands, ordered from most to
least severe; the first band whose upper bound exceeds the miss distance
wins.
"""

from typing import NamedTuple, Tuple

from .schemas import ApproachRisk, RiskLevel, Severity

Band = Tuple[float, RiskLevel]

SATELLITE_BANDS: Tuple[Band, ...] = (
    (42_000.0, RiskLevel.CRITICAL),
    (200_000.0, RiskLevel.ATTENTION),
    (500_000.0, RiskLevel.MONITOR),
)

# the station sits in LEO, so it only escalates on far closer passes
ISS_BANDS: Tuple[Band, ...] = (
    (400.0, RiskLevel.CRITICAL),
    (1_000.0, RiskLevel.ATTENTION),
    (42_000.0, RiskLevel.ATTENTION),
)


class RiskBands(NamedTuple):
    satellites: Tuple[Band, ...] = SATELLITE_BANDS
    iss: Tuple[Band, ...] = ISS_BANDS
    hazardous_earth_level: RiskLevel = RiskLevel.MONITOR


RISK_BANDS = RiskBands()


def level_for(miss_distance_km: float, bands: Tuple[Band, ...]) -> RiskLevel:
    for upper_bound, level in bands:
        if miss_distance_km < upper_bound:
            return level
    return RiskLevel.NONE


def classify(miss_distance_km: float, hazardous: bool, bands: RiskBands = RISK_BANDS) -> ApproachRisk:
    return ApproachRisk(
        earth=bands.hazardous_earth_level if hazardous else RiskLevel.NONE,
        # NeoWs carries no population exposure signal
        human=RiskLevel.NONE,
        iss=level_for(miss_distance_km, bands.iss),
        satellites=level_for(miss_distance_km, bands.satellites),
    )


class ScoreLimits(NamedTuple):
    size_km: Tuple[float, float] = (0.01, 1.0)
    velocity_kph: Tuple[float, float] = (10_000.0, 150_000.0)
    miss_distance_km: Tuple[float, float] = (10_000.0, 50_000_000.0)


SCORE_LIMITS = ScoreLimits()


def _scale(value: float, low: float, high: float, inverse: bool = False) -> float:
    clamped = max(low, min(high, value))
    fraction = (clamped - low) / (high - low)
    return 1 - fraction if inverse else fraction


def severity_for(score: int) -> Severity:
    if score >= 76:
        return Severity.CRITICAL
    if score >= 51:
        return Severity.ALERT
    if score >= 26:
        return Severity.WARNING
    return Severity.INFO


def score(
    size_km: float,
    velocity_kph: float,
    miss_distance_km: float,
    hazardous: bool = False,
    limits: ScoreLimits = SCORE_LIMITS,
) -> Tuple[int, Severity]:
    """Composite 0-100 score: size up to 30, speed up to 30, closeness up to 40."""
    total = (
        _scale(size_km, *limits.size_km) * 30
        + _scale(velocity_kph, *limits.velocity_kph) * 30
        + _scale(miss_distance_km, *limits.miss_distance_km, inverse=True) * 40
    )
    if hazardous:
        total = min(100.0, total * 1.2)
    rounded = int(round(total))
    return rounded, severity_for(rounded)
