import math
from dataclasses import dataclass
from typing import Any, List, Mapping

from errors import FieldLengthError, InvalidCoordinatesError, InvalidQuantityError, MissingFieldError

REQUIRED_FIELDS = ("farmerName", "herbName", "quantity", "latitude", "longitude", "imageUrl")

FARMER_NAME_MAX = 100
HERB_NAME_MAX = 50


@dataclass(frozen=True)
class ValidatedSubmission:
    farmer_name: str
    herb_name: str
    quantity: float
    latitude: float
    longitude: float
    image_url: str


def _is_missing(value: Any) -> bool:
    """
    Absent, None or blank. Unlike a plain falsy test, numeric 0 counts as
    present: the equator and prime meridian are real coordinates, and a zero
    quantity should fail the quantity check rather than look missing.
    """
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _number(value: Any) -> float:
    # bool is an int subclass; "true" is not a quantity
    if isinstance(value, bool):
        raise ValueError("not a number")
    n = float(value)
    if not math.isfinite(n):
        raise ValueError("not a finite number")
    return n


def validate(submission: Mapping[str, Any]) -> ValidatedSubmission:
    """
    Check a raw harvest submission and return its normalized form.

    Order matters: missing fields, then coordinates, then quantity, then
    lengths. The first failing group raises; nothing downstream runs.
    """
    missing = [f for f in REQUIRED_FIELDS if _is_missing(submission.get(f))]
    if missing:
        raise MissingFieldError(missing)

    coord_errors: List[str] = []
    try:
        latitude = _number(submission["latitude"])
        if not -90 <= latitude <= 90:
            coord_errors.append("Latitude must be between -90 and 90")
    except (TypeError, ValueError):
        coord_errors.append("Latitude must be a number")
    try:
        longitude = _number(submission["longitude"])
        if not -180 <= longitude <= 180:
            coord_errors.append("Longitude must be between -180 and 180")
    except (TypeError, ValueError):
        coord_errors.append("Longitude must be a number")
    if coord_errors:
        raise InvalidCoordinatesError(coord_errors)

    try:
        quantity = _number(submission["quantity"])
    except (TypeError, ValueError):
        raise InvalidQuantityError("Quantity must be a number")
    if quantity <= 0:
        raise InvalidQuantityError()

    farmer_name = str(submission["farmerName"]).strip()
    herb_name = str(submission["herbName"]).strip()
    length_errors = []
    if len(farmer_name) > FARMER_NAME_MAX:
        length_errors.append(f"Farmer name cannot exceed {FARMER_NAME_MAX} characters")
    if len(herb_name) > HERB_NAME_MAX:
        length_errors.append(f"Herb name cannot exceed {HERB_NAME_MAX} characters")
    if length_errors:
        raise FieldLengthError(length_errors)

    return ValidatedSubmission(
        farmer_name=farmer_name,
        herb_name=herb_name,
        quantity=quantity,
        latitude=latitude,
        longitude=longitude,
        image_url=str(submission["imageUrl"]).strip(),
    )
