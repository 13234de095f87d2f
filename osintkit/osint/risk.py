"""Risk score calculation."""

from osintkit.models.findings import ScanData
from osintkit.models.report import GeolocationRecord, RiskFactors

BREACH_WEIGHT = 8
BREACH_CAP = 25

INFRASTRUCTURE_BASELINE = 15

GEO_RISK_POINTS = {"low": 0, "medium": 10, "high": 20}

EMAIL_BLACKLIST_POINTS = 15
ABUSE_CONFIDENCE_DIVISOR = 20
BLACKLIST_CAP = 20

DETECTION_WEIGHT = 4
DETECTION_CAP = 20

SCORE_CAP = 100


def calculate_risk_factors(data: ScanData, geolocation: GeolocationRecord | None = None) -> RiskFactors:
    """
    Derive the five risk factors from aggregated findings.

    Scoring:
    - Breach history: 8 pts per breach (max 25)
    - Infrastructure age: 15 minus domain age in years (min 0)
    - Geographic risk: low 0 / medium 10 / high 20
    - Blacklist status: +15 if email blacklisted, +1 per 20% abuse
      confidence (max 20)
    - Security scan results: 4 pts per detection (max 20)

    Live and simulated scans go through this same function.
    """
    breach_history = 0
    infrastructure_age = 0
    geographic_risk = 0
    blacklist_status = 0
    security_scan_results = 0

    if data.email:
        breach_history = min(len(data.email.breaches) * BREACH_WEIGHT, BREACH_CAP)
        if data.email.reputation.blacklisted:
            blacklist_status += EMAIL_BLACKLIST_POINTS

    if data.domain:
        infrastructure_age = max(INFRASTRUCTURE_BASELINE - data.domain.whois.age, 0)
        infrastructure_age = min(infrastructure_age, INFRASTRUCTURE_BASELINE)
        security_scan_results = min(max(data.domain.virus_total.detections, 0) * DETECTION_WEIGHT, DETECTION_CAP)

    if data.ip:
        blacklist_status += max(data.ip.abuse.confidence, 0) // ABUSE_CONFIDENCE_DIVISOR

    if geolocation:
        geographic_risk = GEO_RISK_POINTS.get(geolocation.risk_level.value, 0)

    return RiskFactors(
        breach_history=breach_history,
        infrastructure_age=infrastructure_age,
        geographic_risk=geographic_risk,
        blacklist_status=min(blacklist_status, BLACKLIST_CAP),
        security_scan_results=security_scan_results,
    )


def calculate_threat_score(factors: RiskFactors) -> int:
    return max(min(factors.total(), SCORE_CAP), 0)


def threat_level(score: int) -> str:
    if score >= 70:
        return "CRITICAL"
    elif score >= 50:
        return "HIGH"
    elif score >= 30:
        return "MEDIUM"
    return "LOW"


def get_risk_bar(score: int, width: int = 30) -> str:
    """Generate ASCII risk bar."""
    filled = int((score / 100) * width)
    empty = width - filled

    if score >= 70:
        char = '#'
    elif score >= 50:
        char = '='
    elif score >= 30:
        char = '-'
    else:
        char = '.'

    return f"[{char * filled}{'-' * empty}] {score}/100"
