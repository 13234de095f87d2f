"""Shared fixtures: fresh settings, cache and rate limiter per test."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from osintkit.config import Settings
from osintkit.services import ResultCache, SourceRateLimiter

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

CREDENTIALS = {
    "HIBP_API_KEY": "hibp-key",
    "VIRUSTOTAL_API_KEY": "vt-key",
    "SHODAN_API_KEY": "shodan-key",
    "ABUSEIPDB_API_KEY": "abuse-key",
    "IPINFO_TOKEN": "ipinfo-token",
    "WHOISXML_API_KEY": "whois-key",
}

NO_THROTTLE = {
    "HIBP_RATE_LIMIT_MS": 0,
    "VIRUSTOTAL_RATE_LIMIT_MS": 0,
    "SHODAN_RATE_LIMIT_MS": 0,
    "ABUSEIPDB_RATE_LIMIT_MS": 0,
    "IPINFO_RATE_LIMIT_MS": 0,
    "WHOISXML_RATE_LIMIT_MS": 0,
    "EMAILREP_RATE_LIMIT_MS": 0,
}


def make_settings(**overrides) -> Settings:
    values = {"ENABLE_REAL_APIS": False, "ENABLE_CACHING": True, **NO_THROTTLE}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def live_settings(**overrides) -> Settings:
    return make_settings(ENABLE_REAL_APIS=True, **{**CREDENTIALS, **overrides})


class FakeClock:
    """Manually advanced clock with a sleep that advances it."""

    def __init__(self, start: float = 1_000.0):
        self.now = start
        self.slept: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds

    async def sleep(self, seconds: float):
        self.slept.append(seconds)
        self.now += seconds


# Canned responses keyed by host.
PAYLOADS = {
    "haveibeenpwned.com": [
        {"Name": "Adobe", "BreachDate": "2013-10-04", "PwnCount": 152445165, "IsVerified": True},
        {"Name": "Canva", "BreachDate": "2019-05-24", "PwnCount": 137272116, "IsVerified": False},
    ],
    "emailrep.io": {
        "email": "test@example.com",
        "reputation": "low",
        "suspicious": True,
        "details": {"blacklisted": True, "spam": True, "credentials_leaked": False},
    },
    "www.whoisxmlapi.com": {
        "WhoisRecord": {
            "registrarName": "RESERVED-Internet Assigned Numbers Authority",
            "registryData": {
                "createdDate": "1995-08-14T04:00:00Z",
                "registrant": {"countryCode": "US"},
            },
        }
    },
    "www.virustotal.com": {
        "response_code": 1,
        "positives": 2,
        "scan_date": "2024-01-02 10:00:00",
        "categories": ["parked", "information technology"],
    },
    "api.shodan.io": {
        "matches": [
            {"port": 443, "vulns": {"CVE-2021-44228": {}}},
            {"port": 80},
            {"port": 443},
        ]
    },
    "dns.google": {"Answer": [{"name": "example.com.", "type": 1, "data": "93.184.216.34"}]},
    "ipinfo.io": {
        "ip": "8.8.8.8",
        "city": "Mountain View",
        "region": "California",
        "country": "US",
        "loc": "37.4056,-122.0775",
        "org": "AS15169 Google LLC",
    },
    "api.abuseipdb.com": {
        "data": {
            "ipAddress": "8.8.8.8",
            "abuseConfidenceScore": 45,
            "totalReports": 12,
            "lastReportedAt": "2024-03-01T00:00:00+00:00",
        }
    },
}


class FakeSources:
    """Mock transport answering for every intelligence host."""

    def __init__(self, overrides: dict | None = None):
        self.payloads = {**PAYLOADS, **(overrides or {})}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = self.payloads.get(request.url.host)
        if isinstance(payload, httpx.Response):
            return payload
        if payload is None:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, content=json.dumps(payload).encode(), headers={"Content-Type": "application/json"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def cache() -> ResultCache:
    return ResultCache(ttl_hours=2)


@pytest.fixture
def rate_limiter() -> SourceRateLimiter:
    return SourceRateLimiter()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sources() -> FakeSources:
    return FakeSources()
