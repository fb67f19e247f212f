# freshbite/services/geocoding_client.py
import requests
from requests import RequestException

from freshbite.domain.exceptions import ValidationError, ProviderError
from freshbite.services.address_service import parse_coordinate
from freshbite.utils.retry import http_retry
from freshbite.utils.settings import NOMINATIM_URL, NOMINATIM_USER_AGENT, HTTP_TIMEOUT_SECONDS
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)

MAX_SUGGESTIONS = 5
MIN_QUERY_LENGTH = 3


def _to_suggestion(item: dict) -> dict:
    details = item.get("address") or {}
    return {
        "place_id": str(item.get("place_id", "")),
        "formatted_address": item.get("display_name", ""),
        "latitude": float(item["lat"]),
        "longitude": float(item["lon"]),
        "city": details.get("city") or details.get("town") or details.get("village") or "",
        "state": details.get("state", ""),
        "country": details.get("country", ""),
        "postal_code": details.get("postcode", ""),
    }


class GeocodingClient:
    """Proxy do Nominatim: podpowiedzi adresow i reverse geocoding."""

    def __init__(self, base_url: str | None = None, timeout: int = HTTP_TIMEOUT_SECONDS):
        self.base_url = (base_url or NOMINATIM_URL).rstrip("/")
        self.timeout = timeout
        self.headers = {
            "User-Agent": NOMINATIM_USER_AGENT,
            "Accept-Language": "en",
        }

    @http_retry()
    def _fetch(self, endpoint: str, params: dict):
        url = f"{self.base_url}/{endpoint}"
        logger.info(f"GeocodingClient GET {url}")

        query = {"format": "json", "addressdetails": 1, "limit": MAX_SUGGESTIONS, **params}
        resp = requests.get(url, params=query, headers=self.headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def search(self, q: str | None) -> list[dict]:
        if not q or len(q) < MIN_QUERY_LENGTH:
            raise ValidationError("Search query must be at least 3 characters")

        try:
            data = self._fetch("search", {"q": q})
            return [_to_suggestion(item) for item in data[:MAX_SUGGESTIONS]]
        except (RequestException, KeyError, TypeError, ValueError) as e:
            logger.error(f"Address search error: {e}")
            raise ProviderError("Unable to fetch address suggestions")

    def reverse(self, lat: float | str | None, lon: float | str | None) -> dict:
        latitude = parse_coordinate(lat)
        longitude = parse_coordinate(lon)
        if latitude is None or longitude is None:
            raise ValidationError("Latitude and longitude are required")

        try:
            data = self._fetch("reverse", {"lat": latitude, "lon": longitude, "zoom": 18})
            return _to_suggestion(data)
        except (RequestException, KeyError, TypeError, ValueError) as e:
            logger.error(f"Reverse geocoding error: {e}")
            raise ProviderError("Unable to reverse geocode location")
