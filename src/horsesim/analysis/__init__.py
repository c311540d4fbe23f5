"""Monte Carlo analysis and statistics."""

from .montecarlo import HorseStatistics, MonteCarloRunner, SimulationResults

__all__ = ["HorseStatistics", "MonteCarloRunner", "SimulationResults"]
