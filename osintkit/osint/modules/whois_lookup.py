"""WHOIS registration data via WhoisXML API."""

from typing import Any

from osintkit.models.findings import UNKNOWN
from ..dates import years_since
from .base import SourceAdapter, SourceRequest, as_text


class WhoisLookup(SourceAdapter):
    name = "WHOIS Lookup"
    description = "Domain registration record via WhoisXML"

    def build_request(self, domain: str) -> SourceRequest:
        return SourceRequest(
            url=self.config.base_url,
            params={
                "apiKey": self.config.credential,
                "domainName": domain,
                "outputFormat": "JSON",
            },
        )

    def normalize(self, payload: Any) -> dict:
        record = payload.get("WhoisRecord") if isinstance(payload, dict) else None
        if not isinstance(record, dict):
            record = {}
        registry = record.get("registryData")
        if not isinstance(registry, dict):
            registry = {}

        def registrant_country(section: dict) -> str | None:
            registrant = section.get("registrant")
            if isinstance(registrant, dict):
                return as_text(registrant.get("countryCode"), None) or as_text(registrant.get("country"), None)
            return None

        created = as_text(registry.get("createdDate"), None) or as_text(record.get("createdDate"))

        return {
            "registrar": as_text(registry.get("registrarName"), None) or as_text(record.get("registrarName")),
            "creation_date": created,
            "country": registrant_country(registry) or registrant_country(record) or UNKNOWN,
            "age": years_since(created),
        }
