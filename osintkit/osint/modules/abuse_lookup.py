"""IP abuse reports via AbuseIPDB."""

from typing import Any

from .base import SourceAdapter, SourceRequest, as_int, as_text


class AbuseLookup(SourceAdapter):
    name = "Abuse Database"
    description = "Abuse confidence and report count via AbuseIPDB"

    MAX_AGE_DAYS = 90

    def build_request(self, ip: str) -> SourceRequest:
        return SourceRequest(
            url=f"{self.config.base_url}/check",
            params={"ipAddress": ip, "maxAgeInDays": str(self.MAX_AGE_DAYS)},
            headers={"Key": self.config.credential or ""},
        )

    def normalize(self, payload: Any) -> dict:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            data = {}

        confidence = as_int(data.get("abuseConfidenceScore", data.get("abuseConfidencePercentage")))

        return {
            "confidence": min(max(confidence, 0), 100),
            "reports": max(as_int(data.get("totalReports")), 0),
            "last_reported": as_text(data.get("lastReportedAt")),
        }
