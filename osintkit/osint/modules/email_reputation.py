"""
Email reputation via EmailRep.io.
Works without a key at a low daily quota; a key raises the quota.

Only an explicit blacklist listing sets ``blacklisted``; the overall
"suspicious" verdict is kept as a risk tag and adds no blacklist points.
"""

from typing import Any
from urllib.parse import quote

from .base import SourceAdapter, SourceRequest


# detail flags that become risk tags when true
RISK_FLAGS = [
    "blacklisted",
    "malicious_activity",
    "malicious_activity_recent",
    "credentials_leaked",
    "data_breach",
    "spam",
    "suspicious_tld",
    "spoofable",
]

REPUTATION_SCORES = {"high": 80, "medium": 50}


class EmailReputationLookup(SourceAdapter):
    name = "Email Reputation"
    description = "Reputation and abuse signals via EmailRep"
    requires_credential = False

    def build_request(self, email: str) -> SourceRequest:
        headers = {}
        if self.config.credential:
            headers["Key"] = self.config.credential
        return SourceRequest(
            url=f"{self.config.base_url}/{quote(email, safe='@')}",
            headers=headers,
        )

    def normalize(self, payload: Any) -> dict:
        if not isinstance(payload, dict):
            payload = {}
        details = payload.get("details")
        if not isinstance(details, dict):
            details = {}

        reputation = str(payload.get("reputation") or "none").lower()

        risk_tags = [flag for flag in RISK_FLAGS if details.get(flag) is True]
        if payload.get("suspicious") is True:
            risk_tags.append("suspicious")

        return {
            "score": REPUTATION_SCORES.get(reputation, 20),
            "blacklisted": details.get("blacklisted") is True,
            "risk_tags": risk_tags,
        }
