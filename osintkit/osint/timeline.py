"""Chronological event timeline built from scan findings."""

import logging

from osintkit.models.findings import ScanData, UNKNOWN
from osintkit.models.report import Confidence, EventKind, Severity, TimelineEvent
from .dates import parse_date

logger = logging.getLogger(__name__)


def sort_events(events: list[TimelineEvent]) -> list[TimelineEvent]:
    """Oldest first; events on the same day keep their insertion order."""
    return sorted(events, key=lambda e: e.date)


def build_timeline(data: ScanData) -> list[TimelineEvent]:
    events: list[TimelineEvent] = []

    def add(event_id: str, when: str, **fields):
        parsed = parse_date(when)
        if parsed is None:
            logger.debug("Skipping timeline event %s with unusable date %r", event_id, when)
            return
        events.append(TimelineEvent(id=event_id, date=parsed, **fields))

    domain = data.domain
    if domain and domain.whois.creation_date != UNKNOWN:
        add(
            "domain-registration",
            domain.whois.creation_date,
            kind=EventKind.REGISTRATION,
            title="Domain Registration",
            description=f"Domain registered with {domain.whois.registrar}",
            confidence=Confidence.HIGH,
            source="WHOIS",
            severity=Severity.INFO,
        )

    if data.email:
        for index, breach in enumerate(data.email.breaches):
            add(
                f"breach-{index}",
                breach.date,
                kind=EventKind.BREACH,
                title=f"{breach.name} Data Breach",
                description=f"Email found in {breach.name} breach affecting {breach.accounts:,} accounts",
                confidence=Confidence.HIGH if breach.verified else Confidence.MEDIUM,
                source="HaveIBeenPwned",
                severity=Severity.CRITICAL,
            )

    if domain and domain.virus_total.detections > 0:
        add(
            "security-detections",
            domain.virus_total.scan_date,
            kind=EventKind.MALICIOUS,
            title="Security Threats Detected",
            description=f"{domain.virus_total.detections} security detections found by VirusTotal",
            confidence=Confidence.HIGH,
            source="VirusTotal",
            severity=Severity.WARNING,
        )

    return sort_events(events)
