from fastapi import APIRouter, Query

from ..services.geocoding import ReverseGeocodeResult, reverse_geocode

router = APIRouter(
    prefix="/location",
    tags=["Location"]
)

# Best effort: an unreachable geocoder yields nulls, never an error
@router.get("/reverse", response_model=ReverseGeocodeResult)
def reverse_lookup(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180)
):
    return reverse_geocode(lat, lon) or ReverseGeocodeResult()
