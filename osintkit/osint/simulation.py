"""Synthetic scan data for when live sources are disabled or unavailable."""

import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from osintkit.models.findings import (
    AbuseReport,
    Breach,
    DnsRecord,
    DnsRecords,
    DomainFindings,
    EmailFindings,
    EmailPatterns,
    EmailReputation,
    HostExposure,
    InputType,
    IPFindings,
    IPLocation,
    PlatformPresence,
    ScanData,
    ScanDepth,
    SslCertificate,
    UrlScanSummary,
    UsernameFindings,
    UsernamePatterns,
    WhoisRecord,
)
from osintkit.models.report import (
    DarkWebExposure,
    GeolocationRecord,
    MitreTechnique,
    SimilarTarget,
)
from . import catalogs
from .patterns import (
    detect_email_pattern,
    detect_username_pattern,
    has_corporate_indicators,
    is_corporate_email,
    perturb_target,
    username_variations,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SimulationGenerator:
    """
    Produces schema-conformant findings with plausible distributions.

    All randomness comes from ``rng``; pass a seeded ``random.Random`` (or a
    ``seed``) together with a fixed ``now`` to get identical output on every
    run.
    """

    SIMILAR_TARGET_COUNT = 5

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.rng = rng or random.Random(seed)
        self._now = now

    # ---- helpers ----

    def _chance(self, threshold: float) -> bool:
        return self.rng.random() > threshold

    def _pick(self, options: list):
        return options[self.rng.randrange(len(options))]

    def _keep_some(self, options: list, threshold: float) -> list:
        return [o for o in options if self._chance(threshold)]

    def _days_ago(self, max_days: int = 365) -> str:
        return (self._now().date() - timedelta(days=self.rng.randrange(max_days))).isoformat()

    # ---- per-type findings ----

    def email_findings(self, email: str, depth: ScanDepth) -> EmailFindings:
        breaches = catalogs.KNOWN_BREACHES[:self.rng.randrange(4)]

        findings = EmailFindings(
            breaches=[Breach(**b) for b in breaches],
            reputation=EmailReputation(
                score=self.rng.randrange(100),
                blacklisted=self._chance(0.8),
                risk_tags=self._keep_some(catalogs.EMAIL_RISK_TAGS, 0.7),
            ),
        )

        if depth != ScanDepth.QUICK:
            local = email.split('@', 1)[0]
            findings.patterns = EmailPatterns(
                corporate_format=is_corporate_email(local),
                common_pattern=detect_email_pattern(local),
                similarity_score=self.rng.randrange(100),
            )

        return findings

    def domain_findings(self, domain: str, depth: ScanDepth) -> DomainFindings:
        today = self._now().date()
        year = 2010 + self.rng.randrange(14)
        created = f"{year}-{self.rng.randint(1, 12):02d}-{self.rng.randint(1, 28):02d}"

        findings = DomainFindings(
            whois=WhoisRecord(
                registrar=self._pick(catalogs.REGISTRARS),
                creation_date=created,
                country=self._pick(catalogs.REGISTRANT_COUNTRIES),
                age=max(today.year - year, 0),
            ),
            virus_total=UrlScanSummary(
                detections=self.rng.randrange(8),
                scan_date=today.isoformat(),
                categories=self._keep_some(catalogs.URL_SCAN_CATEGORIES, 0.6),
            ),
        )

        if depth == ScanDepth.DEEP:
            findings.shodan = HostExposure(
                open_ports=self._keep_some(catalogs.COMMON_PORTS, 0.6),
                vulnerabilities=self._keep_some(catalogs.SAMPLE_CVES, 0.8),
            )
            address = '.'.join(str(self.rng.randrange(256)) for _ in range(4))
            findings.dns = DnsRecords(records=[
                DnsRecord(type='A', value=address),
                DnsRecord(type='MX', value=f"mail.{domain}"),
                DnsRecord(type='TXT', value='v=spf1 include:_spf.google.com ~all'),
            ])
            findings.ssl = SslCertificate(
                issuer=self._pick(catalogs.SSL_ISSUERS),
                expires=(today + timedelta(days=self.rng.randrange(1, 366))).isoformat(),
                valid=self._chance(0.1),
            )

        return findings

    def ip_findings(self, ip: str) -> IPFindings:
        return IPFindings(
            geolocation=IPLocation(
                country=self._pick(catalogs.IP_COUNTRIES),
                city=self._pick(catalogs.IP_CITIES),
                region='Region',
                latitude=round(self.rng.uniform(-90, 90), 4),
                longitude=round(self.rng.uniform(-180, 180), 4),
            ),
            organization=self._pick(catalogs.ORGANIZATIONS),
            abuse=AbuseReport(
                confidence=self.rng.randrange(100),
                reports=self.rng.randrange(100),
                last_reported=self._days_ago(),
            ),
        )

    def username_findings(self, username: str, depth: ScanDepth) -> UsernameFindings:
        platforms = []
        for name in catalogs.SIMULATED_PLATFORMS:
            found = self._chance(0.6)
            platforms.append(PlatformPresence(
                name=name,
                found=found,
                url=f"https://{name.lower()}.com/{username}" if found else None,
                last_seen=self._days_ago() if found and self._chance(0.3) else None,
            ))

        findings = UsernameFindings(platforms=platforms)
        if depth != ScanDepth.QUICK:
            findings.patterns = UsernamePatterns(
                format=detect_username_pattern(username),
                variations=username_variations(username),
                corporate_indicators=has_corporate_indicators(username),
            )
        return findings

    def geolocation(self, target: str) -> GeolocationRecord:
        code = self._pick(catalogs.GEO_COUNTRIES)
        return GeolocationRecord(
            country=catalogs.COUNTRY_NAMES[code],
            country_code=code,
            city=self._pick(catalogs.GEO_CITIES),
            region='Region',
            latitude=round(self.rng.uniform(-90, 90), 4),
            longitude=round(self.rng.uniform(-180, 180), 4),
            asn=f"AS{self.rng.randrange(65536)}",
            organization=self._pick(catalogs.ORGANIZATIONS[:3]),
            abuse_contact='abuse@example.com' if self._chance(0.5) else None,
            risk_level=catalogs.country_risk(code),
            flag=catalogs.country_flag(code),
        )

    # ---- deep-scan sections ----

    def dark_web(self, target: str) -> DarkWebExposure:
        appearances = self.rng.randrange(20)
        sources = self._keep_some(catalogs.DARK_WEB_SOURCES, 0.6) or catalogs.DARK_WEB_SOURCES[:1]
        data_types = self._keep_some(catalogs.DARK_WEB_DATA_TYPES, 0.5) or catalogs.DARK_WEB_DATA_TYPES[:1]

        return DarkWebExposure(
            appearances=appearances,
            sources=sources,
            exposure_dates=sorted(self._days_ago() for _ in range(min(appearances, 5))),
            data_types=data_types,
            last_seen=self._days_ago(30) if self._chance(0.5) else None,
            risk_score=min(appearances * 5 + len(data_types) * 10, 100),
        )

    def mitre_attack(self, input_type: InputType) -> list[MitreTechnique]:
        applicable = [t for t in catalogs.MITRE_TECHNIQUES if input_type.value in t['applies_to']]
        selected = self._keep_some(applicable, 0.4)
        return [
            MitreTechnique(**{k: v for k, v in t.items() if k != 'applies_to'})
            for t in selected
        ]

    def similar_targets(self, target: str, input_type: InputType) -> list[SimilarTarget]:
        similar = [
            SimilarTarget(
                target=perturb_target(target, input_type.value, step),
                similarity=self.rng.randint(60, 100),
                correlation_factors=self._keep_some(catalogs.CORRELATION_FACTORS, 0.5),
                last_seen=self._days_ago(),
            )
            for step in range(1, self.SIMILAR_TARGET_COUNT + 1)
        ]
        return sorted(similar, key=lambda s: s.similarity, reverse=True)

    # ---- whole scan ----

    def findings(
        self,
        target: str,
        input_type: InputType,
        depth: ScanDepth,
    ) -> tuple[ScanData, Optional[GeolocationRecord]]:
        data = ScanData()
        geolocation = None

        if input_type == InputType.EMAIL:
            data.email = self.email_findings(target, depth)
        elif input_type == InputType.DOMAIN:
            data.domain = self.domain_findings(target, depth)
            if depth != ScanDepth.QUICK:
                geolocation = self.geolocation(target)
        elif input_type == InputType.IP:
            data.ip = self.ip_findings(target)
            geolocation = self.geolocation(target)
        elif input_type == InputType.USERNAME:
            data.username = self.username_findings(target, depth)

        return data, geolocation
