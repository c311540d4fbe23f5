"""Turn-based horse race simulation."""

from .config import SimulationSettings
from .models import Condition, Distance, Horse
from .simulation import Race, RunningHorse

__version__ = "0.1.0"

__all__ = [
    "Condition",
    "Distance",
    "Horse",
    "Race",
    "RunningHorse",
    "SimulationSettings",
]
