# freshbite/services/routing_client.py
import requests

from freshbite.utils.retry import http_retry
from freshbite.utils.settings import OSRM_URL, HTTP_TIMEOUT_SECONDS
from freshbite.utils.logging import get_logger

logger = get_logger(__name__)


class RoutingClient:
    def __init__(self, base_url: str | None = None, timeout: int = HTTP_TIMEOUT_SECONDS):
        self.base_url = (base_url or OSRM_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def fetch_route(self, src_lat: float, src_lng: float, dst_lat: float, dst_lng: float) -> dict | None:
        """Najlepsza trasa OSRM (geometry/duration/distance) albo None gdy brak tras."""
        # OSRM przyjmuje lng,lat
        url = f"{self.base_url}/route/v1/driving/{src_lng},{src_lat};{dst_lng},{dst_lat}"
        logger.info(f"RoutingClient GET {url}")

        resp = requests.get(
            url,
            params={"steps": "false", "overview": "full", "geometries": "geojson"},
            timeout=self.timeout,
        )
        resp.raise_for_status()

        routes = resp.json().get("routes") or []
        return routes[0] if routes else None
