"""Resolve a domain's A records with Google's DNS-over-HTTPS endpoint."""

from typing import Any

from .base import SourceAdapter, SourceRequest

A_RECORD = 1
MX_RECORD = 15
TXT_RECORD = 16

RECORD_TYPES = {A_RECORD: "A", MX_RECORD: "MX", TXT_RECORD: "TXT"}


class DnsResolver(SourceAdapter):
    name = "DNS Lookup"
    description = "A records via DNS-over-HTTPS"
    requires_credential = False

    def build_request(self, domain: str, record_type: str = "A") -> SourceRequest:
        return SourceRequest(
            url=self.config.base_url,
            params={"name": domain, "type": record_type},
        )

    def normalize(self, payload: Any) -> list[dict]:
        answers = payload.get("Answer") if isinstance(payload, dict) else None
        if not isinstance(answers, list):
            return []

        records = []
        for answer in answers:
            if not isinstance(answer, dict):
                continue
            kind = RECORD_TYPES.get(answer.get("type"))
            value = answer.get("data")
            if kind and value:
                records.append({"type": kind, "value": str(value).strip('"')})
        return records


def first_ipv4(records: list[dict]) -> str | None:
    for record in records:
        if record.get("type") == "A":
            return record["value"]
    return None
