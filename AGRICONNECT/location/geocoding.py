# file: AGRICONNECT/location/geocoding.py
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from AGRICONNECT.core import config

logger = logging.getLogger("location.geocoding")

_client = httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS)


class GeocodingError(Exception):
    """Geocoding did not return an OK status."""

    def __init__(self, status: str, address: str):
        super().__init__(f"Geocoding failed with status {status} for {address!r}")
        self.status = status
        self.address = address


class GeocodingAdapter:
    """Resolve free-text addresses with the Google Geocoding API."""

    def __init__(self, client: httpx.AsyncClient, api_key: Optional[str], url: str = config.GEOCODE_URL):
        self.client = client
        self.api_key = api_key
        self.url = url

    async def geocode(self, address: str) -> Tuple[float, float]:
        """
        Return (lat, lng) for the first result.
        GeocodingError when Google answers with a non-OK status;
        httpx.HTTPStatusError / ValueError when the gateway itself fails.
        """
        resp = await self.client.get(self.url, params={"address": address, "key": self.api_key})
        resp.raise_for_status()
        body: Dict[str, Any] = resp.json()
        status = body.get("status")
        if status != "OK" or not body.get("results"):
            logger.warning("[Geocode] status=%s address=%s", status, address)
            raise GeocodingError(status, address)

        location = body["results"][0]["geometry"]["location"]
        return location["lat"], location["lng"]


def get_geocoder() -> GeocodingAdapter:
    return GeocodingAdapter(_client, config.GOOGLE_MAPS_API_KEY)


async def close_client() -> None:
    await _client.aclose()
