"""
Trial Module

This module defines the abstract base class for trials.

A trial represents one independent run of the genetic algorithm, evolving a
population through generations until a solution is found or the maximum
number of generations is reached. The trial plays the part of the
environment: it drives each network and assigns its fitness.
"""

import numpy as np
from abc        import ABC, abstractmethod
from statistics import mean
from typing     import TYPE_CHECKING

from evonet.run.config      import Config
from evonet.pool.population import Population
if TYPE_CHECKING:
    from evonet.phenotype   import Individual
    from evonet.pool        import GenerationStats

class Trial(ABC):
    """
    Abstract base class for implementing a trial.

    A trial represents one independent run of the genetic algorithm, evolving
    a population through generations until a solution is found or the maximum
    number of generations is reached.

    Subclasses must implement:
    - _reset(): Reset trial-specific state and call super()._reset()
    - _evaluate_fitness(individual): Evaluate fitness for a single individual
    - _report_progress(): Display progress after each generation
    - _final_report(): Display final results

    Subclasses can override:
    - _terminate(): Custom termination logic (default: max generations + fitness threshold)

    Public Attributes:
        failed:     True unless the run reached the fitness threshold
        last_stats: Statistics of the most recently replaced generation (None before the first)

    Public Methods:
        run(): Execute a complete trial
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials in experiments)
        """
        self._config            : Config     = config
        self._generation_counter: int        = 0
        self._population        : Population = None
        self._suppress_output   : bool       = suppress_output
        self.failed             : bool       = True
        self.last_stats         : 'GenerationStats | None' = None

    def run(self):
        """
        Evolve a freshly seeded population until _terminate() says stop.

        Generation 0 is evaluated and reported before the first transition;
        every transition stores the statistics of the replaced generation
        in 'last_stats'.
        """
        self._reset()

        rng = np.random.default_rng(self._config.seed)
        self._population = Population(self._config, rng)

        self._evaluate_fitness_all()
        if not self._suppress_output:
            self._report_progress()

        while not self._terminate():
            self._generation_counter += 1
            self.last_stats = self._population.spawn_next_generation()
            self._evaluate_fitness_all()
            if not self._suppress_output:
                self._report_progress()

        if not self._suppress_output:
            self._final_report()

    @abstractmethod
    def _reset(self):
        """
        Clear the per-run state; overrides call super()._reset() first.
        """
        self._generation_counter = 0
        self.failed = True
        self.last_stats = None

    @abstractmethod
    def _evaluate_fitness(self, individual: 'Individual') -> float:
        """
        Evaluate and return the fitness of an individual.

        This method should drive the individual's network through the problem
        domain and compute a fitness score. Higher fitness values indicate
        better performance and a better rank when pairing parents.

        Parameters:
            individual: The Individual (population slot and network) to evaluate

        Returns:
            float: Fitness score for the individual
        """
        pass

    def _evaluate_fitness_all(self):
        """
        Evaluate, one after the other, the fitness of every individual in the population.
        """
        for individual in self._population.individuals:
            individual.fitness = self._evaluate_fitness(individual)

    @abstractmethod
    def _report_progress(self):
        """
        Report after generation 0 and after every transition (not when output is suppressed).
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Report once the trial has stopped (not when output is suppressed).
        """
        pass

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        Stops after 'max_number_generations' transitions or, when
        'fitness_termination_check' is on, as soon as the max or mean
        fitness of the current generation reaches 'fitness_threshold';
        only the latter clears 'failed'.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self._generation_counter >= self._config.max_number_generations

        # Check whether the fitness has reached a target threshold
        if self._config.fitness_termination_check:
            if self._config.fitness_threshold is None:
                raise RuntimeError("'fitness_threshold' must be set when 'fitness_termination_check' is True")

            network_fitness = [network.fitness for network in self._population.networks]
            overall_fitness = None

            if self._config.fitness_criterion == "max":
                overall_fitness = max(network_fitness)
            elif self._config.fitness_criterion == "mean":
                overall_fitness = mean(network_fitness)
            else:
                raise RuntimeError("bad 'fitness_criterion' in configuration file")

            success = overall_fitness >= self._config.fitness_threshold
            terminate = terminate or success

            if terminate:
                self.failed = not success

        return terminate
