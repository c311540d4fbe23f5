"""Value objects for the race simulation."""

from .condition import Condition
from .distance import VALID_DISTANCES, Distance
from .horse import Horse

__all__ = [
    "VALID_DISTANCES",
    "Condition",
    "Distance",
    "Horse",
]
