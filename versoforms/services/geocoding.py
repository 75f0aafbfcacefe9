import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from ..config import GEOCODER_URL, GEOCODER_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

class ReverseGeocodeResult(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None

def reverse_geocode(latitude: float, longitude: float, client: Optional[httpx.Client] = None) -> Optional[ReverseGeocodeResult]:
    """Best-effort lookup of city/state for a coordinate pair.

    Returns None on any network or decoding failure; the failure is logged only.
    """
    params = {"format": "json", "lat": latitude, "lon": longitude}
    headers = {"User-Agent": "versoforms/1.0"}
    try:
        if client is None:
            with httpx.Client(base_url=GEOCODER_URL, timeout=GEOCODER_TIMEOUT_SECONDS) as own_client:
                resp = own_client.get("/reverse", params=params, headers=headers)
        else:
            resp = client.get("/reverse", params=params, headers=headers)
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Reverse geocoding failed, using coordinates only: %s", e)
        return None

    address = data.get("address") if isinstance(data, dict) else None
    if not address:
        return None
    return ReverseGeocodeResult(
        city=address.get("city") or address.get("town") or address.get("village"),
        state=address.get("state")
    )
