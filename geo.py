"""
Coordinate classification against India's bounding box.

The region table is a rough approximation built from overlapping
rectangles; lookups take the first rectangle that matches, so the order of
REGIONS decides overlaps (e.g. most of Delhi/Haryana also sits inside the
Rajasthan box).
"""
from dataclasses import dataclass
from typing import Tuple

INDIA_BOUNDS = (8.4, 37.6, 68.7, 97.25)  # lat_min, lat_max, lon_min, lon_max

COUNTRY_INSIDE = "India"
COUNTRY_OUTSIDE = "Outside India"
REGION_UNKNOWN = "Unknown"
REGION_OTHER = "India (Other State)"

REGIONS: Tuple[Tuple[float, float, float, float, str], ...] = (
    (28.0, 30.5, 76.8, 78.5, "Delhi/Haryana"),
    (26.0, 30.5, 70.0, 78.0, "Rajasthan"),
    (21.0, 26.0, 68.0, 74.5, "Gujarat"),
    (15.0, 21.0, 73.0, 80.5, "Maharashtra"),
    (11.0, 18.5, 74.0, 81.5, "Karnataka/Andhra Pradesh"),
    (8.0, 13.0, 76.0, 80.5, "Tamil Nadu/Kerala"),
    (18.0, 25.0, 80.0, 87.5, "Odisha/Chhattisgarh"),
    (22.0, 27.5, 85.0, 89.5, "West Bengal/Jharkhand"),
    (24.0, 28.5, 80.0, 84.5, "Uttar Pradesh/Bihar"),
    (30.0, 37.6, 74.0, 80.0, "Himachal Pradesh/Uttarakhand"),
)


@dataclass(frozen=True)
class GeoClassification:
    is_within_region: bool
    country: str
    region_label: str


def _inside(lat: float, lon: float, lat_min: float, lat_max: float, lon_min: float, lon_max: float) -> bool:
    return lat_min <= lat <= lat_max and lon_min <= lon <= lon_max


def classify(latitude: float, longitude: float) -> GeoClassification:
    """Classify a coordinate pair. Never raises; callers range-check first."""
    if not _inside(latitude, longitude, *INDIA_BOUNDS):
        return GeoClassification(False, COUNTRY_OUTSIDE, REGION_UNKNOWN)

    for lat_min, lat_max, lon_min, lon_max, label in REGIONS:
        if _inside(latitude, longitude, lat_min, lat_max, lon_min, lon_max):
            return GeoClassification(True, COUNTRY_INSIDE, label)
    return GeoClassification(True, COUNTRY_INSIDE, REGION_OTHER)
