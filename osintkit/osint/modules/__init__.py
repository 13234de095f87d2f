"""Source adapter registry."""

from .base import SourceAdapter, SourceRequest

from .breach_lookup import BreachLookup
from .email_reputation import EmailReputationLookup
from .whois_lookup import WhoisLookup
from .url_scan import UrlScanLookup
from .host_search import HostSearch
from .abuse_lookup import AbuseLookup
from .geolocation import GeolocationLookup
from .dns_resolver import DnsResolver, first_ipv4
from .username_checker import UsernameChecker

# adapter class -> settings prefix
SOURCE_KEYS = {
    BreachLookup: "HIBP",
    EmailReputationLookup: "EMAILREP",
    WhoisLookup: "WHOISXML",
    UrlScanLookup: "VIRUSTOTAL",
    HostSearch: "SHODAN",
    AbuseLookup: "ABUSEIPDB",
    GeolocationLookup: "IPINFO",
    DnsResolver: "DNS",
}

EMAIL_MODULES = [BreachLookup, EmailReputationLookup]
DOMAIN_MODULES = [WhoisLookup, UrlScanLookup]
DOMAIN_DEEP_MODULES = [HostSearch]
IP_MODULES = [GeolocationLookup, AbuseLookup]

__all__ = [
    "SourceAdapter",
    "SourceRequest",
    "SOURCE_KEYS",
    "EMAIL_MODULES",
    "DOMAIN_MODULES",
    "DOMAIN_DEEP_MODULES",
    "IP_MODULES",
    "BreachLookup",
    "EmailReputationLookup",
    "WhoisLookup",
    "UrlScanLookup",
    "HostSearch",
    "AbuseLookup",
    "GeolocationLookup",
    "DnsResolver",
    "first_ipv4",
    "UsernameChecker",
]
