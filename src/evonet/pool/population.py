"""
Population Module

This module implements the Population class, which holds one generation of
networks and turns it into the next one with a genetic algorithm: selection,
crossover, mutation and reinsertion of the previous generation's best.

Classes:
    Population: Fixed-size generation of networks and the evolution step
"""

import numpy as np
import time
from datetime   import timedelta
from statistics import mean, median
from typing     import TYPE_CHECKING, Callable, Mapping, Sequence

from evonet.activations           import get_activation
from evonet.phenotype             import Individual, Network
from evonet.pool.generation_stats import GenerationStats
if TYPE_CHECKING:
    from evonet.run.config import Config

class Population:
    """
    A population of networks evolved by a genetic algorithm.

    The networks are evaluated by an external environment, which assigns a
    fitness to each of them (through 'individuals' or 'assign_fitness()').
    Once every network has a fitness, spawn_next_generation() replaces the
    whole population:

        1. the fitness of the generation is summarized and sent to listeners
        2. the networks are ranked by descending fitness (the parent pool)
        3. neighbouring parents (0 & 1, 2 & 3, ...) may produce two children
        4. every child is mutated
        5. if fewer children than the population size were produced, the
           fittest networks of the old generation fill the gap, unmutated

    All random draws come from the generator given at construction, so a
    seeded generator reproduces a run exactly.

    Public Attributes:
        networks:   The networks of the current generation
        generation: Number of transitions performed so far

    Public Properties:
        individuals: One Individual per network, in population order

    Public Methods:
        assign_fitness(fitness):   Set the fitness of every network at once
        get_fittest_network():     Return the network with the highest fitness
        spawn_next_generation():   Create the next generation
        select_parents():          Rank the networks by descending fitness
        crossover(parents):        Produce offspring from consecutive parent pairs
        mutate(offspring):         Mutate offspring in place
        reinsert(offspring):       Fill the new generation and install it
        add_listener(callback):    Subscribe to per-generation statistics
        remove_listener(callback): Unsubscribe
    """

    def __init__(self, config: 'Config', rng: np.random.Generator | None = None):
        """
        Create a population of randomly initialized networks.

        Parameters:
            config: Stores configuration parameters
            rng:    Random number generator; built from 'config.seed' if omitted
        """
        size = config.population_size
        if size is None or size < 2 or size % 2 != 0:
            raise ValueError(f"population size must be even and at least 2, got {size}")

        self._size   = size
        self._config = config
        self._rng    = rng if rng is not None else np.random.default_rng(config.seed)

        # One instance shared by every layer of every network
        if config.activation == 'sigmoid':
            self._activation = get_activation('sigmoid', coefficient=config.sigmoid_coefficient)
        else:
            self._activation = get_activation(config.activation)

        self.networks: list[Network] = []
        for _ in range(size):
            network = Network(config.topology)
            network.randomize(config.init_min_value, config.init_max_value, self._rng)
            network.set_activation_function(self._activation)
            self.networks.append(network)

        self.generation = 0
        self._listeners: list[Callable[[GenerationStats], None]] = []
        self._previous_max_fitness    = 0.0
        self._previous_median_fitness = 0.0
        self._previous_mean_fitness   = 0.0
        self._started_at = time.perf_counter()

    @property
    def size(self) -> int:
        return self._size

    @property
    def individuals(self) -> list[Individual]:
        return [Individual(index, network) for index, network in enumerate(self.networks)]

    def assign_fitness(self, fitness: Mapping[int, float] | Sequence[float]):
        """
        Set the fitness of the networks from the environment's scores.

        Parameters:
            fitness: Either a mapping from population index to fitness,
                     or a sequence of fitness values in population order
        """
        items = fitness.items() if isinstance(fitness, Mapping) else enumerate(fitness)
        for index, value in items:
            if not 0 <= index < len(self.networks):
                raise IndexError(f"no network at population index {index}")
            self.networks[index].fitness = float(value)

    def get_fittest_network(self) -> 'Network | None':
        """
        Return the network with the highest fitness, or None if the population is empty.
        """
        if not self.networks:
            return None
        return max(self.networks, key=lambda network: network.fitness)

    def add_listener(self, callback: Callable[[GenerationStats], None]):
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[GenerationStats], None]):
        self._listeners.remove(callback)

    def spawn_next_generation(self) -> GenerationStats:
        """
        Replace the current generation with the next one.

        Assumes the fitness of every network has been assigned.

        Returns:
            The statistics of the generation that was just replaced
        """
        stats     = self._update_stats()
        parents   = self.select_parents()
        offspring = self.crossover(parents)
        self.mutate(offspring)
        self.reinsert(offspring)
        return stats

    def select_parents(self) -> list[Network]:
        """
        Rank the whole population by descending fitness.

        Every network is a parent; the ranking decides who is paired with whom.
        The sort is stable, so networks of equal fitness keep their order.
        """
        ranked = sorted(self.networks, key=lambda network: network.fitness, reverse=True)
        return ranked[:self.size]

    def crossover(self, parents: list[Network]) -> list[Network]:
        """
        Pair up consecutive parents and let each pair produce offspring.

        Parameters:
            parents: Networks in mating order (see select_parents())

        Returns:
            The offspring; two per pair that passed the crossover probability check
        """
        offspring = []
        for i in range(0, len(parents) - 1, 2):
            if self._rng.random() < self._config.crossover_probability:
                offspring.extend(self._cross_pair(parents[i], parents[i + 1]))
        return offspring

    def _cross_pair(self, parent1: Network, parent2: Network) -> tuple[Network, Network]:
        """
        Uniform crossover of two parents, one weight/bias position at a time.

        At each position a draw below 'crossover_chance' keeps the values in
        line (child1 <- parent1, child2 <- parent2); otherwise they are swapped.
        """
        child1 = parent1.topology_copy()
        child2 = parent1.topology_copy()
        chance = self._config.crossover_chance

        for layer1, layer2, child_layer1, child_layer2 in zip(parent1.layers, parent2.layers,
                                                              child1.layers,  child2.layers):
            keep = self._rng.random(layer1.weights.shape) < chance
            child_layer1.set_weights(np.where(keep, layer1.weights, layer2.weights))
            child_layer2.set_weights(np.where(keep, layer2.weights, layer1.weights))

            keep = self._rng.random(layer1.biases.shape) < chance
            child_layer1.set_biases(np.where(keep, layer1.biases, layer2.biases))
            child_layer2.set_biases(np.where(keep, layer2.biases, layer1.biases))

        return child1, child2

    def mutate(self, offspring: list[Network]):
        for network in offspring:
            network.mutate(self._config.mutation_chance, self._config.mutation_strength, self._rng)

    def reinsert(self, offspring: list[Network]):
        """
        Complete the new generation and make it the current one.

        If there are fewer offspring than the population size, the fittest
        networks of the current generation are carried over, as they are.

        Parameters:
            offspring: The mutated offspring; extended in place
        """
        shortfall = self.size - len(offspring)
        if shortfall > 0:
            best = sorted(self.networks, key=lambda network: network.fitness, reverse=True)
            offspring.extend(best[:shortfall])

        self.networks = offspring
        self.generation += 1

    def _update_stats(self) -> GenerationStats:
        """
        Summarize the fitness of the current generation and notify the listeners.
        """
        fitness = [network.fitness for network in self.networks]
        now     = time.perf_counter()

        stats = GenerationStats(number                  = self.generation + 1,
                                population              = len(self.networks),
                                max_fitness             = max(fitness),
                                median_fitness          = median(fitness),
                                mean_fitness            = mean(fitness),
                                previous_max_fitness    = self._previous_max_fitness,
                                previous_median_fitness = self._previous_median_fitness,
                                previous_mean_fitness   = self._previous_mean_fitness,
                                duration                = timedelta(seconds=now - self._started_at))

        self._previous_max_fitness    = stats.max_fitness
        self._previous_median_fitness = stats.median_fitness
        self._previous_mean_fitness   = stats.mean_fitness
        self._started_at = now

        for listener in list(self._listeners):
            listener(stats)

        return stats

    def __str__(self):
        return '\n'.join(repr(network) for network in self.networks)
