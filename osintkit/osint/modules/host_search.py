"""Exposed services for a host via the Shodan search API."""

from typing import Any

from .base import SourceAdapter, SourceRequest

MAX_PORTS = 10
MAX_VULNS = 5


class HostSearch(SourceAdapter):
    name = "Host Search"
    description = "Open ports and known CVEs via Shodan"

    def build_request(self, query: str) -> SourceRequest:
        return SourceRequest(
            url=f"{self.config.base_url}/shodan/host/search",
            params={"key": self.config.credential, "query": query},
        )

    def normalize(self, payload: Any) -> dict:
        matches = payload.get("matches") if isinstance(payload, dict) else None
        if not isinstance(matches, list):
            matches = []

        ports: list[int] = []
        vulns: list[str] = []
        for match in matches:
            if not isinstance(match, dict):
                continue
            port = match.get("port")
            if isinstance(port, int) and port not in ports:
                ports.append(port)
            found = match.get("vulns")
            if not isinstance(found, (dict, list)):
                continue
            for cve in found:
                cve = str(cve)
                if cve not in vulns:
                    vulns.append(cve)

        return {
            "open_ports": ports[:MAX_PORTS],
            "vulnerabilities": vulns[:MAX_VULNS],
        }
