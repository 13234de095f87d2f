"""Malware / URL reputation for a domain via the VirusTotal v2 API."""

from typing import Any

from ..dates import parse_date, today_iso
from .base import SourceAdapter, SourceRequest, as_int


class UrlScanLookup(SourceAdapter):
    name = "URL Scan"
    description = "Malicious URL detections via VirusTotal"

    def build_request(self, domain: str) -> SourceRequest:
        return SourceRequest(
            url=f"{self.config.base_url}/domain/report",
            params={"apikey": self.config.credential, "domain": domain},
        )

    def normalize(self, payload: Any) -> dict:
        if not isinstance(payload, dict):
            payload = {}

        detected = payload.get("detected_urls")
        if not isinstance(detected, list):
            detected = []

        positives = payload.get("positives")
        if isinstance(positives, int):
            detections = positives
        else:
            detections = sum(1 for u in detected if isinstance(u, dict) and as_int(u.get("positives")) > 0)

        categories = payload.get("categories") or []
        if isinstance(categories, dict):
            categories = list(categories.values())
        elif not isinstance(categories, list):
            categories = [str(categories)]

        scan_date = parse_date(payload.get("scan_date"))
        if scan_date is None:
            # newest detection date stands in when the report has no scan date
            dates = [parse_date(u.get("scan_date")) for u in detected if isinstance(u, dict)]
            dates = [d for d in dates if d]
            scan_date = max(dates) if dates else None

        return {
            "detections": max(int(detections), 0),
            "scan_date": scan_date.isoformat() if scan_date else today_iso(),
            "categories": sorted({str(c) for c in categories})[:5],
        }
