"""Unit conversion for weights and distances.

Stored weights are pounds and distances are miles. The provider is asked to
convert metric values itself; the reconcile helpers catch responses where it
echoed the raw metric number instead.
"""
import re
from typing import List, Optional

from workout_tracker_api.services.prompts import KG_TO_LB, KM_TO_MILES

_KG_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:kgs?|kilos?|kilograms?)\b", re.IGNORECASE)
_KM_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:km|kms|kilometers?|kilometres?|k)\b", re.IGNORECASE)

# Two numbers closer than this are treated as the same reading
_MATCH_TOLERANCE = 0.05


def kg_to_lb(kg: float) -> float:
    return round(kg * KG_TO_LB, 2)


def km_to_miles(km: float) -> float:
    return round(km * KM_TO_MILES, 2)


def find_kilograms(text: str) -> List[float]:
    """All kilogram quantities stated in ``text`` ("80kg", "60 kilograms")."""
    return [float(m.group(1)) for m in _KG_RE.finditer(text or "")]


def find_kilometers(text: str) -> List[float]:
    """All kilometer quantities stated in ``text`` ("5 km", "10k")."""
    return [float(m.group(1)) for m in _KM_RE.finditer(text or "")]


def _matches_any(value: float, candidates: List[float]) -> bool:
    return any(abs(value - candidate) < _MATCH_TOLERANCE for candidate in candidates)


def reconcile_weight(weight: Optional[float], text: str) -> Optional[float]:
    """Convert ``weight`` to pounds if it is the unconverted kg figure from ``text``."""
    if weight is None:
        return None
    if _matches_any(weight, find_kilograms(text)):
        return kg_to_lb(weight)
    return weight


def reconcile_distance(distance: Optional[float], text: str) -> Optional[float]:
    """Convert ``distance`` to miles if it is the unconverted km figure from ``text``."""
    if distance is None:
        return None
    if _matches_any(distance, find_kilometers(text)):
        return km_to_miles(distance)
    return distance
