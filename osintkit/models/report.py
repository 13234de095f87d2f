"""Data models for the final OSINT report."""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import Field

from .findings import CamelModel, InputType, ScanData, ScanDepth, UNKNOWN


class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class EventKind(str, Enum):
    REGISTRATION = "registration"
    BREACH = "breach"
    MALICIOUS = "malicious"
    SUSPICIOUS = "suspicious"
    SCAN = "scan"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskFactors(CamelModel):
    breach_history: int = Field(default=0, ge=0, le=25)
    infrastructure_age: int = Field(default=0, ge=0, le=15)
    geographic_risk: int = Field(default=0, ge=0, le=20)
    blacklist_status: int = Field(default=0, ge=0, le=20)
    security_scan_results: int = Field(default=0, ge=0, le=20)

    def total(self) -> int:
        return (
            self.breach_history
            + self.infrastructure_age
            + self.geographic_risk
            + self.blacklist_status
            + self.security_scan_results
        )


class TimelineEvent(CamelModel):
    id: str
    date: dt.date
    kind: EventKind = Field(serialization_alias="type")
    title: str
    description: str
    confidence: Confidence
    source: str
    severity: Severity


class GeolocationRecord(CamelModel):
    country: str = UNKNOWN
    country_code: str = "XX"
    city: str = UNKNOWN
    region: str = UNKNOWN
    latitude: float = 0.0
    longitude: float = 0.0
    asn: str = UNKNOWN
    organization: str = UNKNOWN
    abuse_contact: Optional[str] = None
    risk_level: RiskLevel = RiskLevel.LOW
    flag: str = "\U0001F3F3️"


class DarkWebExposure(CamelModel):
    appearances: int = 0
    sources: list[str] = Field(default_factory=list)
    exposure_dates: list[str] = Field(default_factory=list)
    data_types: list[str] = Field(default_factory=list)
    last_seen: Optional[str] = None
    risk_score: int = Field(default=0, ge=0, le=100)


class MitreTechnique(CamelModel):
    technique_id: str
    tactic_category: str
    technique: str
    confidence: Confidence
    description: str
    mitigation: str


class SimilarTarget(CamelModel):
    target: str
    similarity: int = Field(ge=60, le=100)
    correlation_factors: list[str] = Field(default_factory=list)
    last_seen: str


class Freshness(str, Enum):
    FRESH = "fresh"
    STALE = "stale"
    EXPIRED = "expired"


class CacheStatus(str, Enum):
    HIT = "hit"
    MISS = "miss"


class ScanMode(str, Enum):
    LIVE = "live"
    SIMULATED = "simulated"


class ReportMetadata(CamelModel):
    generated_at: dt.datetime
    expires_at: dt.datetime
    data_freshness: Freshness = Freshness.FRESH
    cache_status: CacheStatus = CacheStatus.MISS
    scan_duration_ms: int = 0
    mode: ScanMode = ScanMode.SIMULATED
    sources_queried: list[str] = Field(default_factory=list)
    sources_failed: list[str] = Field(default_factory=list)


class OSINTResult(CamelModel):
    input_type: InputType
    target: str
    scan_depth: ScanDepth
    timestamp: dt.datetime
    threat_score: int = Field(ge=0, le=100)
    threat_level: str
    risk_factors: RiskFactors
    data: ScanData
    timeline: list[TimelineEvent] = Field(default_factory=list)
    geolocation: Optional[GeolocationRecord] = None
    dark_web: Optional[DarkWebExposure] = None
    mitre_attack: list[MitreTechnique] = Field(default_factory=list)
    similar_targets: list[SimilarTarget] = Field(default_factory=list)
    metadata: ReportMetadata
