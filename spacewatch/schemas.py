from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ObjectType(str, Enum):
    PAYLOAD = "PAYLOAD"
    ROCKET_BODY = "ROCKET_BODY"
    DEBRIS = "DEBRIS"
    UNKNOWN = "UNKNOWN"


class OrbitClass(str, Enum):
    LEO = "LEO"
    MEO = "MEO"
    GEO = "GEO"
    HEO = "HEO"
    UNKNOWN = "UNKNOWN"


class ObjectStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DECAYED = "DECAYED"
    UNKNOWN = "UNKNOWN"


class RcsSize(str, Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class RiskLevel(str, Enum):
    """Heuristic severity tier, ordered from least to most severe."""

    NONE = "None"
    LOW = "Low"
    MONITOR = "Monitor"
    ATTENTION = "Attention"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return list(RiskLevel).index(self)

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ALERT = "alert"
    CRITICAL = "critical"


class SpaceObject(BaseModel):
    model_config = ConfigDict(frozen=True)

    norad_id: int
    name: str
    object_id: Optional[str] = None
    object_type: ObjectType
    country: Optional[str] = None
    launch_date: Optional[date] = None
    decay_date: Optional[date] = None
    inclination_deg: Optional[float] = None
    period_minutes: Optional[float] = None
    apogee_km: Optional[float] = None
    perigee_km: Optional[float] = None
    orbit_class: OrbitClass
    status: ObjectStatus
    rcs_size: Optional[RcsSize] = None
    source: str


class TypeCounts(BaseModel):
    payload: int = 0
    rocket_body: int = 0
    debris: int = 0
    unknown: int = 0


class OrbitCounts(BaseModel):
    leo: int = 0
    meo: int = 0
    geo: int = 0
    heo: int = 0
    unknown: int = 0


class Asteroid(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    designation: Optional[str] = None
    diameter_min_km: float
    diameter_max_km: float
    hazardous: bool
    sentry: bool = False

    @property
    def size_km(self) -> float:
        return (self.diameter_min_km + self.diameter_max_km) / 2


class ApproachEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    asteroid_id: str
    approach_date: str
    approach_timestamp: int
    relative_velocity_km_s: float
    miss_distance_km: float
    orbiting_body: str = "Earth"


class ApproachRisk(BaseModel):
    model_config = ConfigDict(frozen=True)

    earth: RiskLevel = RiskLevel.NONE
    human: RiskLevel = RiskLevel.NONE
    iss: RiskLevel = RiskLevel.NONE
    satellites: RiskLevel = RiskLevel.NONE


class FlatApproach(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    size_km: float
    velocity_km_s: float
    velocity_kph: float
    miss_distance_km: float
    approach_date: str
    approach_timestamp: int
    is_potentially_hazardous: bool
    risk_earth: RiskLevel
    risk_human: RiskLevel
    risk_iss: RiskLevel
    risk_satellites: RiskLevel
    risk_score: int
    severity: Severity


class DateRange(BaseModel):
    start: str
    end: str


class CatalogEnvelope(BaseModel):
    objects: List[SpaceObject]
    count: int
    counts_by_type: TypeCounts
    counts_by_orbit: OrbitCounts
    fetched_at: int
    is_mock: bool = False
    warning: Optional[str] = None
    error_code: Optional[str] = None
    dataset_version: Optional[str] = None


class ApproachEnvelope(BaseModel):
    approaches: List[FlatApproach]
    asteroids: List[Asteroid]
    events: List[ApproachEvent]
    count: int
    hazardous_count: int
    date_range: DateRange
    fetched_at: int
    is_mock: bool = False
    warning: Optional[str] = None
    error_code: Optional[str] = None
    dataset_version: Optional[str] = None


class CatalogQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    object_type: Optional[ObjectType] = None
    country: Optional[str] = None
    active_only: bool = False
    orbit_class: Optional[OrbitClass] = None
    limit: int = 1000


class ApproachQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date
    hazardous_only: bool = False
