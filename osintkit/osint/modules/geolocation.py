"""IP geolocation and network ownership via IPinfo."""

from typing import Any

from osintkit.models.findings import UNKNOWN
from ..catalogs import COUNTRY_NAMES, country_flag, country_risk
from .base import SourceAdapter, SourceRequest, as_text


def _parse_loc(loc: Any) -> tuple[float, float]:
    try:
        lat, lon = str(loc).split(",", 1)
        return float(lat), float(lon)
    except ValueError:
        return 0.0, 0.0


class GeolocationLookup(SourceAdapter):
    name = "IP Geolocation"
    description = "Location, ASN and organization via IPinfo"

    def build_request(self, ip: str) -> SourceRequest:
        return SourceRequest(
            url=f"{self.config.base_url}/{ip}",
            params={"token": self.config.credential},
        )

    def normalize(self, payload: Any) -> dict:
        if not isinstance(payload, dict):
            payload = {}

        country = as_text(payload.get("country"))
        code = country.upper() if country != UNKNOWN else "XX"
        org = as_text(payload.get("org"))
        latitude, longitude = _parse_loc(payload.get("loc") or "")
        asn = org.split(" ", 1)[0] if org.startswith("AS") else UNKNOWN

        abuse = payload.get("abuse")
        abuse_contact = as_text(abuse.get("email"), None) if isinstance(abuse, dict) else None

        return {
            "country": COUNTRY_NAMES.get(code, country),
            "country_code": code,
            "city": as_text(payload.get("city")),
            "region": as_text(payload.get("region")),
            "latitude": latitude,
            "longitude": longitude,
            "asn": asn,
            "organization": org,
            "abuse_contact": abuse_contact,
            "risk_level": country_risk(code),
            "flag": country_flag(code),
        }
