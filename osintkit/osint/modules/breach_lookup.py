"""
Check for data breaches using the HaveIBeenPwned v3 API.
Requires an API key; 404 means the account is not in any breach.
Docs: https://haveibeenpwned.com/API/v3
"""

from typing import Any
from urllib.parse import quote

from .base import SourceAdapter, SourceRequest, as_int, as_text


class BreachLookup(SourceAdapter):
    name = "Breach Lookup"
    description = "Check for data breaches via HaveIBeenPwned"

    def build_request(self, email: str) -> SourceRequest:
        return SourceRequest(
            url=f"{self.config.base_url}/breachedaccount/{quote(email, safe='')}",
            params={"truncateResponse": "false"},
            headers={"hibp-api-key": self.config.credential or ""},
            empty_statuses=(404,),
        )

    def normalize(self, payload: Any) -> list[dict]:
        if not isinstance(payload, list):
            return []

        breaches = []
        for breach in payload:
            if not isinstance(breach, dict):
                continue
            breaches.append({
                "name": as_text(breach.get("Name")),
                "date": as_text(breach.get("BreachDate")),
                "accounts": max(as_int(breach.get("PwnCount")), 0),
                "verified": breach.get("IsVerified") is True,
            })
        return breaches
