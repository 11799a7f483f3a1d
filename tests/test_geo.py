import pytest

from geo import classify


@pytest.mark.parametrize(
    "lat,lon",
    [
        (51.5, -0.1),     # London
        (8.3, 77.0),      # just south of the box
        (37.7, 77.0),     # just north
        (20.0, 68.6),     # just west
        (20.0, 97.3),     # just east
        (-33.9, 151.2),   # Sydney
        (0.0, 0.0),
    ],
)
def test_outside_bounding_box(lat, lon):
    geo = classify(lat, lon)
    assert geo.is_within_region is False
    assert geo.country == "Outside India"
    assert geo.region_label == "Unknown"


@pytest.mark.parametrize(
    "lat,lon,region",
    [
        (28.6, 77.2, "Delhi/Haryana"),
        (19.0, 75.0, "Maharashtra"),
        (26.9, 72.0, "Rajasthan"),
        (23.0, 72.5, "Gujarat"),
        (14.0, 77.5, "Karnataka/Andhra Pradesh"),
        (10.0, 78.0, "Tamil Nadu/Kerala"),
        (21.0, 84.0, "Odisha/Chhattisgarh"),
        (22.5, 88.3, "West Bengal/Jharkhand"),
        (26.8, 82.0, "Uttar Pradesh/Bihar"),
        (32.0, 77.0, "Himachal Pradesh/Uttarakhand"),
    ],
)
def test_region_lookup(lat, lon, region):
    geo = classify(lat, lon)
    assert geo.is_within_region is True
    assert geo.country == "India"
    assert geo.region_label == region


def test_unmatched_point_inside_india():
    geo = classify(35.0, 95.0)
    assert geo.is_within_region is True
    assert geo.region_label == "India (Other State)"


def test_overlap_resolved_by_declaration_order():
    # (29.0, 77.0) sits in both the Delhi/Haryana and Rajasthan boxes
    assert classify(29.0, 77.0).region_label == "Delhi/Haryana"


def test_bounds_are_inclusive():
    assert classify(8.4, 68.7).is_within_region is True
    assert classify(37.6, 97.25).is_within_region is True
