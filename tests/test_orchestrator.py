"""End-to-end scans through the orchestrator with mocked sources."""

import asyncio
import random

import httpx
import pytest

from osintkit.models import InputType, ScanDepth
from osintkit.models.report import CacheStatus, ScanMode
from osintkit.errors import ScanInProgressError, TargetValidationError
from osintkit.models.findings import SourceResult, WhoisRecord
from osintkit.osint.modules import AbuseLookup
from osintkit.osint.orchestrator import ScanOrchestrator, ScanState, scan
from osintkit.osint.simulation import SimulationGenerator
from osintkit.services import ResultCache, SourceRateLimiter
from tests.conftest import FIXED_NOW, FakeSources, live_settings, make_settings


def seeded(seed: int = 7) -> SimulationGenerator:
    return SimulationGenerator(rng=random.Random(seed), now=lambda: FIXED_NOW)


def orchestrator(config, cache, rate_limiter, sources=None, seed=7) -> ScanOrchestrator:
    return ScanOrchestrator(
        cache,
        rate_limiter,
        config=config,
        simulator=seeded(seed),
        transport=sources.transport if sources else None,
    )


# ---- simulation mode ----

@pytest.mark.asyncio
@pytest.mark.parametrize("input_type,target", [
    ("email", "test@example.com"),
    ("domain", "example.com"),
    ("ip", "8.8.8.8"),
    ("username", "octocat"),
])
@pytest.mark.parametrize("depth", ["quick", "standard", "deep"])
async def test_simulation_never_touches_network(input_type, target, depth, settings, cache, rate_limiter, sources):
    result = await orchestrator(settings, cache, rate_limiter, sources).scan(target, input_type, depth)

    assert sources.requests == []
    assert result.metadata.mode == ScanMode.SIMULATED
    assert 0 <= result.threat_score <= 100
    assert result.threat_score == min(result.risk_factors.total(), 100)
    assert (result.dark_web is not None) == (depth == "deep")
    assert bool(result.similar_targets) == (depth == "deep")


@pytest.mark.asyncio
async def test_simulated_email_quick(settings, cache, rate_limiter):
    for seed in range(10):
        result = await orchestrator(settings, cache, rate_limiter, seed=seed).scan(
            "test@example.com", InputType.EMAIL, ScanDepth.QUICK
        )
        assert 0 <= len(result.data.email.breaches) <= 3
        assert result.geolocation is None
        assert result.risk_factors.geographic_risk == 0
        assert result.risk_factors.breach_history == min(len(result.data.email.breaches) * 8, 25)


@pytest.mark.asyncio
async def test_simulated_ip_standard(settings, cache, rate_limiter):
    result = await orchestrator(settings, cache, rate_limiter).scan("8.8.8.8", "ip", "standard")

    assert result.geolocation is not None
    assert result.risk_factors.geographic_risk in {0, 10, 20}
    assert result.metadata.cache_status == CacheStatus.MISS
    assert result.threat_level in {"LOW", "MEDIUM", "HIGH", "CRITICAL"}


@pytest.mark.asyncio
async def test_same_seed_same_report(settings):
    first = await orchestrator(settings, ResultCache(2), SourceRateLimiter(), seed=3).scan("example.com", "domain", "deep")
    second = await orchestrator(settings, ResultCache(2), SourceRateLimiter(), seed=3).scan("example.com", "domain", "deep")

    assert first.data == second.data
    assert first.threat_score == second.threat_score
    assert first.similar_targets == second.similar_targets


# ---- live mode ----

@pytest.mark.asyncio
async def test_live_email_scan(cache, rate_limiter, sources):
    result = await orchestrator(live_settings(), cache, rate_limiter, sources).scan("test@example.com", "email", "standard")

    assert result.metadata.mode == ScanMode.LIVE
    assert sorted(sources.hosts()) == ["emailrep.io", "haveibeenpwned.com"]
    assert [b.name for b in result.data.email.breaches] == ["Adobe", "Canva"]
    assert result.data.email.reputation.blacklisted
    assert result.risk_factors.breach_history == 16
    assert result.risk_factors.blacklist_status == 15
    assert result.threat_score == 31
    assert result.threat_level == "MEDIUM"
    assert [e.date.isoformat() for e in result.timeline] == ["2013-10-04", "2019-05-24"]


@pytest.mark.asyncio
async def test_partial_failure_keeps_live_mode(cache, rate_limiter):
    sources = FakeSources({"haveibeenpwned.com": httpx.Response(500)})
    result = await orchestrator(live_settings(), cache, rate_limiter, sources).scan("test@example.com", "email", "quick")

    assert result.metadata.mode == ScanMode.LIVE
    assert result.metadata.sources_failed == ["hibp"]
    assert result.data.email.breaches == []
    assert result.risk_factors.breach_history == 0
    assert result.threat_score == 15


@pytest.mark.asyncio
async def test_missing_credential_is_a_soft_failure(cache, rate_limiter, sources):
    config = live_settings(HIBP_API_KEY=None)
    result = await orchestrator(config, cache, rate_limiter, sources).scan("test@example.com", "email", "quick")

    assert "haveibeenpwned.com" not in sources.hosts()
    assert "hibp" in result.metadata.sources_failed
    assert result.metadata.mode == ScanMode.LIVE


@pytest.mark.asyncio
async def test_live_ip_scan(cache, rate_limiter, sources):
    result = await orchestrator(live_settings(), cache, rate_limiter, sources).scan("8.8.8.8", "ip", "standard")

    assert result.geolocation.country_code == "US"
    assert result.geolocation.organization == "AS15169 Google LLC"
    assert result.data.ip.geolocation.city == "Mountain View"
    assert result.data.ip.abuse.confidence == 45
    assert result.risk_factors.blacklist_status == 2
    assert result.risk_factors.geographic_risk == 0


@pytest.mark.asyncio
async def test_live_domain_deep_scan_is_cached(cache, rate_limiter, sources):
    config = live_settings()

    first = await orchestrator(config, cache, rate_limiter, sources).scan("example.com", "domain", "deep")
    assert sorted(sources.hosts()) == [
        "api.shodan.io", "dns.google", "ipinfo.io", "www.virustotal.com", "www.whoisxmlapi.com",
    ]
    assert first.metadata.cache_status == CacheStatus.MISS
    assert first.data.domain.whois.age >= 29
    assert first.data.domain.whois.country == "US"
    assert first.data.domain.virus_total.detections == 2
    assert first.data.domain.shodan.open_ports == [443, 80]
    assert first.data.domain.dns.records[0].value == "93.184.216.34"
    assert first.dark_web is not None

    sources.requests.clear()
    second = await orchestrator(config, cache, rate_limiter, sources).scan("example.com", "domain", "deep")
    assert sources.requests == []
    assert second.metadata.cache_status == CacheStatus.HIT
    assert second.data.domain.whois == first.data.domain.whois
    assert second.data.domain.virus_total == first.data.domain.virus_total


@pytest.mark.asyncio
async def test_caching_disabled_hits_network_every_time(rate_limiter, sources):
    config = live_settings(ENABLE_CACHING=False)
    cache = ResultCache(2)

    await orchestrator(config, cache, rate_limiter, sources).scan("test@example.com", "email", "quick")
    await orchestrator(config, cache, rate_limiter, sources).scan("test@example.com", "email", "quick")

    assert len(sources.requests) == 4
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_rate_limit_falls_back_to_simulation(cache, sources):
    limiter = SourceRateLimiter(max_requests=0)
    orch = orchestrator(live_settings(), cache, limiter, sources)

    result = await orch.scan("test@example.com", "email", "standard")

    assert sources.requests == []
    assert result.metadata.mode == ScanMode.SIMULATED
    assert orch.state == ScanState.COMPLETE
    assert any("FALLING BACK" in line for line in orch.audit_log)


@pytest.mark.asyncio
async def test_live_username_scan(cache, rate_limiter, sources):
    result = await orchestrator(live_settings(), cache, rate_limiter, sources).scan("octocat", "username", "standard")

    assert sources.requests == []
    assert result.metadata.mode == ScanMode.LIVE
    assert result.data.username.platforms
    assert not any(p.found for p in result.data.username.platforms)


@pytest.mark.asyncio
@pytest.mark.parametrize("target,input_type", [
    ("not-an-email", "email"),
    ("999.1.1.1", "ip"),
    ("a", "username"),
    ("   ", "domain"),
])
async def test_invalid_target_rejected(target, input_type, settings, cache, rate_limiter):
    with pytest.raises(TargetValidationError):
        await orchestrator(settings, cache, rate_limiter).scan(target, input_type, "quick")


@pytest.mark.asyncio
async def test_module_level_scan(cache, rate_limiter, sources):
    result = await scan(
        "test@example.com", "email", "quick",
        cache=cache, rate_limiter=rate_limiter, config=live_settings(), transport=sources.transport,
    )
    assert result.metadata.mode == ScanMode.LIVE
    assert result.metadata.sources_queried == ["hibp", "emailrep"]


# ---- malformed source data ----

@pytest.mark.asyncio
async def test_loosely_typed_payloads_keep_live_mode(cache, rate_limiter):
    sources = FakeSources({
        "ipinfo.io": {"country": "US", "org": 15169, "loc": "37.4,-122.0"},
        "api.abuseipdb.com": {"data": {"abuseConfidenceScore": "n/a", "totalReports": 3}},
    })
    result = await orchestrator(live_settings(), cache, rate_limiter, sources).scan("8.8.8.8", "ip", "standard")

    assert result.metadata.mode == ScanMode.LIVE
    assert result.metadata.sources_failed == []
    assert result.geolocation.country_code == "US"
    assert result.geolocation.organization == "15169"
    assert result.data.ip.abuse.confidence == 0
    assert result.data.ip.abuse.reports == 3


@pytest.mark.asyncio
async def test_normalize_error_fails_one_source_only(cache, rate_limiter, sources, monkeypatch):
    def broken(self, payload):
        raise ValueError("unexpected shape")

    monkeypatch.setattr(AbuseLookup, "normalize", broken)
    result = await orchestrator(live_settings(), cache, rate_limiter, sources).scan("8.8.8.8", "ip", "standard")

    assert result.metadata.mode == ScanMode.LIVE
    assert result.metadata.sources_failed == ["abuseipdb"]
    assert result.geolocation.country_code == "US"
    assert result.data.ip.abuse.confidence == 0


def test_result_that_does_not_fit_schema_is_marked_failed(settings, cache, rate_limiter):
    orch = orchestrator(settings, cache, rate_limiter)
    bad = SourceResult(source_name="whoisxml", success=True, data={"age": "very old"})
    orch.results = [bad]

    assert orch._parse(bad, lambda data: WhoisRecord(**data)) is None
    assert orch.results[0].success is False
    assert orch.results[0].error == "malformed response"
    assert any("DISCARDED: whoisxml" in line for line in orch.audit_log)


# ---- one scan per orchestrator ----

@pytest.mark.asyncio
async def test_overlapping_scans_on_one_orchestrator_are_rejected(cache, rate_limiter, sources):
    async def slow(request):
        await asyncio.sleep(0.05)
        return sources.handler(request)

    orch = ScanOrchestrator(
        cache,
        rate_limiter,
        config=live_settings(),
        simulator=seeded(),
        transport=httpx.MockTransport(slow),
    )

    first, second = await asyncio.gather(
        orch.scan("test@example.com", "email", "quick"),
        orch.scan("other@example.com", "email", "quick"),
        return_exceptions=True,
    )

    assert first.metadata.mode == ScanMode.LIVE
    assert first.target == "test@example.com"
    assert isinstance(second, ScanInProgressError)

    again = await orch.scan("other@example.com", "email", "quick")
    assert again.target == "other@example.com"


@pytest.mark.asyncio
async def test_orchestrator_reusable_after_rejected_target(settings, cache, rate_limiter):
    orch = orchestrator(settings, cache, rate_limiter)
    with pytest.raises(TargetValidationError):
        await orch.scan("nope", "email", "quick")

    result = await orch.scan("test@example.com", "email", "quick")
    assert result.target == "test@example.com"
