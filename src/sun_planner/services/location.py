"""Location resolution with a fixed fallback coordinate."""

import logging

from sun_planner.domain.weather import GeoLocation

STOCKHOLM = GeoLocation(lat=59.3293, lon=18.0686)

_logger = logging.getLogger(__name__)


def resolve_location(
    lat: float | None,
    lon: float | None,
    fallback: GeoLocation = STOCKHOLM,
) -> GeoLocation:
    """Return the supplied coordinate, or the fallback when unusable."""
    if lat is None or lon is None:
        return fallback
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        _logger.warning("Ignoring out-of-range coordinate lat=%s lon=%s", lat, lon)
        return fallback
    return GeoLocation(lat=lat, lon=lon)
