"""
Generation Statistics Module

Classes:
    GenerationStats: Summary of one generation, emitted at each transition
"""

from dataclasses import dataclass
from datetime    import timedelta

@dataclass(frozen=True)
class GenerationStats:
    """
    Fitness summary of a generation, taken just before it is replaced.

    The 'previous_*' values are those of the generation before it
    (0.0 for the first generation of a run).
    """
    number                 : int
    population             : int
    max_fitness            : float
    median_fitness         : float
    mean_fitness           : float
    previous_max_fitness   : float
    previous_median_fitness: float
    previous_mean_fitness  : float
    duration               : timedelta

    def __str__(self):
        s  = f"GENERATION {self.number:04d}\n"
        s += f"population size = {self.population}\n"
        s += f"maximum fitness = {self.max_fitness:.4f} (previous {self.previous_max_fitness:.4f})\n"
        s += f"median fitness  = {self.median_fitness:.4f} (previous {self.previous_median_fitness:.4f})\n"
        s += f"mean fitness    = {self.mean_fitness:.4f} (previous {self.previous_mean_fitness:.4f})\n"
        s += f"duration        = {self.duration.total_seconds():.2f}s"
        return s
