from dataclasses import dataclass
from pydantic_settings import BaseSettings
from typing import Optional


@dataclass(frozen=True)
class SourceConfig:
    name: str
    base_url: str
    credential: Optional[str]
    rate_limit_ms: int


class Settings(BaseSettings):
    APP_NAME: str = "osintkit"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    ENABLE_REAL_APIS: bool = False
    ENABLE_CACHING: bool = True
    CACHE_DURATION_HOURS: float = 2

    ADAPTER_TIMEOUT_SECONDS: float = 10.0
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_MAX_REQUESTS: int = 60

    SIMULATION_SEED: Optional[int] = None

    HIBP_API_KEY: Optional[str] = None
    HIBP_BASE_URL: str = "https://haveibeenpwned.com/api/v3"
    HIBP_RATE_LIMIT_MS: int = 1500

    VIRUSTOTAL_API_KEY: Optional[str] = None
    VIRUSTOTAL_BASE_URL: str = "https://www.virustotal.com/vtapi/v2"
    VIRUSTOTAL_RATE_LIMIT_MS: int = 15000  # free tier: 4 req/min

    SHODAN_API_KEY: Optional[str] = None
    SHODAN_BASE_URL: str = "https://api.shodan.io"
    SHODAN_RATE_LIMIT_MS: int = 1000

    ABUSEIPDB_API_KEY: Optional[str] = None
    ABUSEIPDB_BASE_URL: str = "https://api.abuseipdb.com/api/v2"
    ABUSEIPDB_RATE_LIMIT_MS: int = 1000

    IPINFO_TOKEN: Optional[str] = None
    IPINFO_BASE_URL: str = "https://ipinfo.io"
    IPINFO_RATE_LIMIT_MS: int = 1000

    WHOISXML_API_KEY: Optional[str] = None
    WHOISXML_BASE_URL: str = "https://www.whoisxmlapi.com/whoisserver/WhoisService"
    WHOISXML_RATE_LIMIT_MS: int = 1000

    EMAILREP_API_KEY: Optional[str] = None
    EMAILREP_BASE_URL: str = "https://emailrep.io"
    EMAILREP_RATE_LIMIT_MS: int = 1000

    DNS_BASE_URL: str = "https://dns.google/resolve"
    DNS_RATE_LIMIT_MS: int = 0

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def cache_ttl_seconds(self) -> float:
        return self.CACHE_DURATION_HOURS * 3600

    def source(self, name: str) -> SourceConfig:
        """Connection details for one intelligence source, e.g. ``source("HIBP")``."""
        prefix = name.upper()
        credential = getattr(self, f"{prefix}_API_KEY", None)
        if credential is None:
            credential = getattr(self, f"{prefix}_TOKEN", None)
        return SourceConfig(
            name=name.lower(),
            base_url=getattr(self, f"{prefix}_BASE_URL"),
            credential=credential or None,
            rate_limit_ms=getattr(self, f"{prefix}_RATE_LIMIT_MS"),
        )


SOURCE_NAMES = ("HIBP", "VIRUSTOTAL", "SHODAN", "ABUSEIPDB", "IPINFO", "WHOISXML", "EMAILREP")


settings = Settings()
