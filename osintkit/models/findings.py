"""Data models for aggregated OSINT findings."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Optional
from enum import Enum


class InputType(str, Enum):
    EMAIL = "email"
    DOMAIN = "domain"
    IP = "ip"
    USERNAME = "username"


class ScanDepth(str, Enum):
    QUICK = "quick"
    STANDARD = "standard"
    DEEP = "deep"


class CamelModel(BaseModel):
    """Snake-case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


UNKNOWN = "Unknown"


class SourceResult(BaseModel):
    """Outcome of one adapter call. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    source_name: str
    success: bool
    data: Any = None
    error: Optional[str] = None
    cached: bool = False
    cached_at: Optional[float] = None


# ---- email ----

class Breach(CamelModel):
    name: str = UNKNOWN
    date: str = UNKNOWN
    accounts: int = 0
    verified: bool = False


class EmailReputation(CamelModel):
    score: int = 0
    blacklisted: bool = False
    risk_tags: list[str] = Field(default_factory=list)


class EmailPatterns(CamelModel):
    corporate_format: bool = False
    common_pattern: str = "custom"
    similarity_score: int = 0


class EmailFindings(CamelModel):
    breaches: list[Breach] = Field(default_factory=list)
    reputation: EmailReputation = Field(default_factory=EmailReputation)
    patterns: Optional[EmailPatterns] = None


# ---- domain ----

class WhoisRecord(CamelModel):
    registrar: str = UNKNOWN
    creation_date: str = UNKNOWN
    country: str = UNKNOWN
    age: int = 0


class UrlScanSummary(CamelModel):
    detections: int = 0
    scan_date: str = ""
    categories: list[str] = Field(default_factory=list)


class HostExposure(CamelModel):
    open_ports: list[int] = Field(default_factory=list)
    vulnerabilities: list[str] = Field(default_factory=list)


class DnsRecord(CamelModel):
    type: str
    value: str


class DnsRecords(CamelModel):
    records: list[DnsRecord] = Field(default_factory=list)


class SslCertificate(CamelModel):
    issuer: str = UNKNOWN
    expires: str = UNKNOWN
    valid: bool = False


class DomainFindings(CamelModel):
    whois: WhoisRecord = Field(default_factory=WhoisRecord)
    virus_total: UrlScanSummary = Field(default_factory=UrlScanSummary)
    shodan: Optional[HostExposure] = None
    dns: Optional[DnsRecords] = None
    ssl: Optional[SslCertificate] = None


# ---- ip ----

class IPLocation(CamelModel):
    country: str = UNKNOWN
    city: str = UNKNOWN
    region: str = UNKNOWN
    latitude: float = 0.0
    longitude: float = 0.0


class AbuseReport(CamelModel):
    confidence: int = 0
    reports: int = 0
    last_reported: str = UNKNOWN


class IPFindings(CamelModel):
    geolocation: IPLocation = Field(default_factory=IPLocation)
    organization: str = UNKNOWN
    abuse: AbuseReport = Field(default_factory=AbuseReport)


# ---- username ----

class PlatformPresence(CamelModel):
    name: str
    found: bool = False
    url: Optional[str] = None
    last_seen: Optional[str] = None


class UsernamePatterns(CamelModel):
    format: str = "custom"
    variations: list[str] = Field(default_factory=list)
    corporate_indicators: bool = False


class UsernameFindings(CamelModel):
    platforms: list[PlatformPresence] = Field(default_factory=list)
    patterns: Optional[UsernamePatterns] = None


class ScanData(CamelModel):
    """Per-type findings; exactly one field is set for a given scan."""
    email: Optional[EmailFindings] = None
    domain: Optional[DomainFindings] = None
    ip: Optional[IPFindings] = None
    username: Optional[UsernameFindings] = None
