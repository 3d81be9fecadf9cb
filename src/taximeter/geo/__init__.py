from .distance import (
    haversine_distance_km,
    haversine_distance_m,
    offset_position,
    sample_distance_m,
)

__all__ = [
    "haversine_distance_m",
    "haversine_distance_km",
    "sample_distance_m",
    "offset_position",
]
