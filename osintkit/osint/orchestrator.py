"""Orchestrator coordinates source adapters, scoring and report assembly."""

import asyncio
import logging
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

import httpx

from osintkit.config import Settings, settings as default_settings
from osintkit.errors import ScanInProgressError
from osintkit.models.findings import (
    AbuseReport,
    Breach,
    DnsRecords,
    DomainFindings,
    EmailFindings,
    EmailReputation,
    HostExposure,
    InputType,
    IPFindings,
    IPLocation,
    PlatformPresence,
    ScanData,
    ScanDepth,
    SourceResult,
    UrlScanSummary,
    UsernameFindings,
    WhoisRecord,
)
from osintkit.models.report import GeolocationRecord, OSINTResult, ScanMode
from osintkit.services.cache import ResultCache
from osintkit.services.rate_limit import SourceRateLimiter
from .classifier import require_target
from .metadata import build_metadata
from .modules import (
    DOMAIN_DEEP_MODULES,
    DOMAIN_MODULES,
    EMAIL_MODULES,
    IP_MODULES,
    SOURCE_KEYS,
    AbuseLookup,
    BreachLookup,
    DnsResolver,
    EmailReputationLookup,
    GeolocationLookup,
    HostSearch,
    SourceAdapter,
    UrlScanLookup,
    UsernameChecker,
    WhoisLookup,
    first_ipv4,
)
from .risk import calculate_risk_factors, calculate_threat_score, get_risk_bar, threat_level
from .simulation import SimulationGenerator
from .timeline import build_timeline

logger = logging.getLogger(__name__)


async def _gather(*aws):
    """gather() that lets every task finish before re-raising the first error."""
    outcomes = await asyncio.gather(*aws, return_exceptions=True)
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
    return outcomes


class ScanState(str, Enum):
    IDLE = "idle"
    CLASSIFYING = "classifying"
    DISPATCHING = "dispatching"
    AGGREGATING = "aggregating"
    SCORING = "scoring"
    FINALIZING = "finalizing"
    SIMULATING = "simulating"
    COMPLETE = "complete"


class ScanOrchestrator:
    """
    Coordinates one scan at a time.

    Flow:
    1. CLASSIFYING: reject targets that do not match the requested type
    2. DISPATCHING: run the adapters for the target type concurrently
    3. AGGREGATING: fold adapter results into the per-type findings
    4. SCORING: timeline, risk factors, threat score
    5. FINALIZING: metadata

    With live sources disabled the whole scan comes from the simulation
    generator. If anything escapes steps 2-4 the live attempt is dropped and
    the scan is rebuilt from simulation instead.

    The cache and rate limiter are shared between orchestrators. Per-scan
    state lives on the instance, so a second scan() while one is running
    raises ScanInProgressError; create one orchestrator per concurrent scan.
    """

    def __init__(
        self,
        cache: ResultCache,
        rate_limiter: SourceRateLimiter,
        config: Optional[Settings] = None,
        simulator: Optional[SimulationGenerator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or default_settings
        self.cache = cache
        self.rate_limiter = rate_limiter
        self.simulator = simulator or SimulationGenerator(seed=self.config.SIMULATION_SEED)
        self.transport = transport
        self.state = ScanState.IDLE
        self.audit_log: list[str] = []
        self.results: list[SourceResult] = []
        self.start_time: float = 0
        self._busy = False

    def _log(self, message: str, level: str = "INFO"):
        """Add timestamped audit log entry."""
        timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S")
        self.audit_log.append(f"[{timestamp}] [{level}] {message}")
        logger.log(logging.getLevelName(level), message)

    def _enter(self, state: ScanState):
        self.state = state
        self._log(f"STATE: {state.value.upper()}", "DEBUG")

    @property
    def live_enabled(self) -> bool:
        return self.config.ENABLE_REAL_APIS

    async def scan(
        self,
        target: str,
        input_type: InputType | str,
        depth: ScanDepth | str = ScanDepth.STANDARD,
    ) -> OSINTResult:
        """
        Execute a scan and return the full report.

        Raises:
            TargetValidationError: target does not classify as ``input_type``
            ScanInProgressError: this orchestrator is already running a scan
        """
        if self._busy:
            raise ScanInProgressError("orchestrator is already running a scan")
        self._busy = True
        try:
            return await self._execute(target, input_type, depth)
        finally:
            self._busy = False

    async def _execute(self, target: str, input_type: InputType | str, depth: ScanDepth | str) -> OSINTResult:
        self.audit_log = []
        self.results = []
        self.start_time = time.monotonic()

        input_type = InputType(input_type)
        depth = ScanDepth(depth)
        target = target.strip()

        self._enter(ScanState.CLASSIFYING)
        require_target(target, input_type)
        self._log(f"SCAN INITIATED: {input_type.value} / {depth.value}")

        if not self.live_enabled:
            self._log("LIVE SOURCES DISABLED, USING SIMULATION")
            return self._simulate(target, input_type, depth)

        try:
            result = await self._scan_live(target, input_type, depth)
        except Exception as e:
            self._log(f"LIVE SCAN FAILED ({type(e).__name__}: {e}), FALLING BACK TO SIMULATION", "WARNING")
            return self._simulate(target, input_type, depth)

        self._enter(ScanState.COMPLETE)
        return result

    # ---- live path ----

    async def _scan_live(self, target: str, input_type: InputType, depth: ScanDepth) -> OSINTResult:
        async with httpx.AsyncClient(
            transport=self.transport,
            timeout=self.config.ADAPTER_TIMEOUT_SECONDS,
        ) as client:
            self._enter(ScanState.DISPATCHING)
            data = ScanData()
            geolocation = None

            if input_type == InputType.EMAIL:
                data.email = await self._scan_email(client, target)
            elif input_type == InputType.DOMAIN:
                scans: list[Any] = [self._scan_domain(client, target, depth)]
                if depth != ScanDepth.QUICK:
                    scans.append(self._geolocate_domain(client, target))
                outcome = await _gather(*scans)
                data.domain = outcome[0]
                if len(outcome) > 1:
                    geolocation, records = outcome[1]
                    if depth == ScanDepth.DEEP and records:
                        data.domain.dns = DnsRecords(records=records)
            elif input_type == InputType.IP:
                data.ip, geolocation = await self._scan_ip(client, target)
            elif input_type == InputType.USERNAME:
                data.username = await self._scan_username(target)

        failed = [r.source_name for r in self.results if not r.success]
        if failed:
            self._log(f"PARTIAL RESULTS, FAILED SOURCES: {', '.join(failed)}", "WARNING")

        return self._finish(target, input_type, depth, data, geolocation, ScanMode.LIVE)

    def _adapter(self, adapter_cls: type[SourceAdapter], client: httpx.AsyncClient) -> SourceAdapter:
        return adapter_cls(
            config=self.config.source(SOURCE_KEYS[adapter_cls]),
            client=client,
            rate_limiter=self.rate_limiter,
            cache=self.cache if self.config.ENABLE_CACHING else None,
            timeout=self.config.ADAPTER_TIMEOUT_SECONDS,
        )

    async def _run(self, adapters: list[type[SourceAdapter]], client: httpx.AsyncClient, **params) -> dict[type, SourceResult]:
        """Run adapters concurrently with the same parameters."""
        for adapter_cls in adapters:
            self._log(f"QUERYING: {adapter_cls.name.upper()}")
        results = await _gather(*(self._adapter(a, client).fetch(**params) for a in adapters))
        for adapter_cls, result in zip(adapters, results):
            self.results.append(result)
            if result.success:
                suffix = " (CACHED)" if result.cached else ""
                self._log(f"  OK: {adapter_cls.name}{suffix}", "INFO")
            else:
                self._log(f"  FAILED: {adapter_cls.name} - {result.error}", "WARNING")
        return dict(zip(adapters, results))

    def _parse(self, result: SourceResult, build: Callable[[Any], Any]) -> Any:
        """
        Build report models from a successful result.

        A payload that does not fit the report schema marks that one source
        as failed and returns None; the rest of the scan carries on.
        """
        if not result.success:
            return None
        try:
            return build(result.data)
        except (ValueError, TypeError) as e:
            self._log(f"  DISCARDED: {result.source_name} - {type(e).__name__}", "WARNING")
            failed = result.model_copy(update={"success": False, "error": "malformed response"})
            self.results = [failed if r is result else r for r in self.results]
            return None

    async def _scan_email(self, client: httpx.AsyncClient, email: str) -> EmailFindings:
        results = await self._run(EMAIL_MODULES, client, email=email)
        self._enter(ScanState.AGGREGATING)

        findings = EmailFindings()
        breaches = self._parse(results[BreachLookup], lambda data: [Breach(**b) for b in data])
        if breaches is not None:
            findings.breaches = breaches
        reputation = self._parse(results[EmailReputationLookup], lambda data: EmailReputation(**data))
        if reputation is not None:
            findings.reputation = reputation
        return findings

    async def _scan_domain(self, client: httpx.AsyncClient, domain: str, depth: ScanDepth) -> DomainFindings:
        results = await self._run(DOMAIN_MODULES, client, domain=domain)
        if depth == ScanDepth.DEEP:
            results.update(await self._run(DOMAIN_DEEP_MODULES, client, query=f"hostname:{domain}"))
        self._enter(ScanState.AGGREGATING)

        findings = DomainFindings(virus_total=UrlScanSummary(scan_date=datetime.now(timezone.utc).date().isoformat()))
        whois = self._parse(results[WhoisLookup], lambda data: WhoisRecord(**data))
        if whois is not None:
            findings.whois = whois
        url_scan = self._parse(results[UrlScanLookup], lambda data: UrlScanSummary(**data))
        if url_scan is not None:
            findings.virus_total = url_scan
        if HostSearch in results:
            findings.shodan = self._parse(results[HostSearch], lambda data: HostExposure(**data))
        return findings

    async def _geolocate_domain(self, client: httpx.AsyncClient, domain: str) -> tuple[GeolocationRecord, list[dict]]:
        """Resolve the domain, then geolocate its first A record."""
        dns = (await self._run([DnsResolver], client, domain=domain))[DnsResolver]
        records = dns.data if dns.success else []
        address = first_ipv4(records)
        if address is None:
            self._log(f"  NO A RECORD FOR {domain}, GEOLOCATION SKIPPED", "WARNING")
            return GeolocationRecord(), records

        geo = (await self._run([GeolocationLookup], client, ip=address))[GeolocationLookup]
        return self._parse(geo, lambda data: GeolocationRecord(**data)) or GeolocationRecord(), records

    async def _scan_ip(self, client: httpx.AsyncClient, ip: str) -> tuple[IPFindings, GeolocationRecord]:
        results = await self._run(IP_MODULES, client, ip=ip)
        self._enter(ScanState.AGGREGATING)

        findings = IPFindings()
        geolocation = GeolocationRecord()
        geo = self._parse(results[GeolocationLookup], lambda data: GeolocationRecord(**data))
        if geo is not None:
            geolocation = geo
            findings.geolocation = IPLocation(
                country=geolocation.country,
                city=geolocation.city,
                region=geolocation.region,
                latitude=geolocation.latitude,
                longitude=geolocation.longitude,
            )
            findings.organization = geolocation.organization
        abuse = self._parse(results[AbuseLookup], lambda data: AbuseReport(**data))
        if abuse is not None:
            findings.abuse = abuse
        return findings, geolocation

    async def _scan_username(self, username: str) -> UsernameFindings:
        checker = UsernameChecker()
        self._log(f"QUERYING: {checker.name.upper()}")
        result = await checker.fetch(username)
        self.results.append(result)
        self._enter(ScanState.AGGREGATING)
        return UsernameFindings(platforms=[PlatformPresence(**p) for p in result.data])

    # ---- simulation path ----

    def _simulate(self, target: str, input_type: InputType, depth: ScanDepth) -> OSINTResult:
        self._enter(ScanState.SIMULATING)
        self.results = []
        data, geolocation = self.simulator.findings(target, input_type, depth)
        result = self._finish(target, input_type, depth, data, geolocation, ScanMode.SIMULATED)
        self._enter(ScanState.COMPLETE)
        return result

    # ---- shared tail ----

    def _finish(
        self,
        target: str,
        input_type: InputType,
        depth: ScanDepth,
        data: ScanData,
        geolocation: Optional[GeolocationRecord],
        mode: ScanMode,
    ) -> OSINTResult:
        self._enter(ScanState.SCORING)
        timeline = build_timeline(data)
        factors = calculate_risk_factors(data, geolocation)
        score = calculate_threat_score(factors)
        self._log(f"RISK SCORE: {get_risk_bar(score)}")

        dark_web = None
        mitre_attack = []
        similar_targets = []
        if depth == ScanDepth.DEEP:
            # No live feed exists for these sections.
            dark_web = self.simulator.dark_web(target)
            mitre_attack = self.simulator.mitre_attack(input_type)
            similar_targets = self.simulator.similar_targets(target, input_type)

        self._enter(ScanState.FINALIZING)
        metadata = build_metadata(
            started_at=self.start_time,
            ttl_seconds=self.config.cache_ttl_seconds,
            results=self.results,
            mode=mode,
        )

        result = OSINTResult(
            input_type=input_type,
            target=target,
            scan_depth=depth,
            timestamp=metadata.generated_at,
            threat_score=score,
            threat_level=threat_level(score),
            risk_factors=factors,
            data=data,
            timeline=timeline,
            geolocation=geolocation,
            dark_web=dark_web,
            mitre_attack=mitre_attack,
            similar_targets=similar_targets,
            metadata=metadata,
        )

        self._log(f"SCAN COMPLETE ({metadata.scan_duration_ms} ms, {mode.value.upper()})")
        return result


async def scan(
    target: str,
    input_type: InputType | str,
    depth: ScanDepth | str,
    *,
    cache: ResultCache,
    rate_limiter: SourceRateLimiter,
    config: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> OSINTResult:
    """Run a single scan with a throwaway orchestrator."""
    orchestrator = ScanOrchestrator(cache, rate_limiter, config=config, transport=transport)
    return await orchestrator.scan(target, input_type, depth)
