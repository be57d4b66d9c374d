"""
Unit tests for evonet.pool.population module.

This module contains tests for the Population class, which holds a
generation of networks and produces the next one.
"""

import pytest
import numpy as np
from datetime      import timedelta
from unittest.mock import Mock

from evonet.activations         import SigmoidActivation, TanhActivation
from evonet.phenotype           import Individual, Network
from evonet.pool.generation_stats import GenerationStats
from evonet.pool.population     import Population
from evonet.run.config          import Config


# ============================================================================
# Helpers
# ============================================================================

def assert_same_values(network1, network2):
    for layer1, layer2 in zip(network1.layers, network2.layers):
        np.testing.assert_array_equal(layer1.weights, layer2.weights)
        np.testing.assert_array_equal(layer1.biases, layer2.biases)


def make_config(**overrides):
    config = Config()
    config.population_size = 4
    config.topology        = (5, 3, 2)
    config.seed            = 42
    for name, value in overrides.items():
        setattr(config, name, value)
    return config


# ============================================================================
# Test Population Initialization
# ============================================================================

class TestPopulationInit:
    """Test Population.__init__ method."""

    def test_creates_networks(self, small_config, rng):
        population = Population(small_config, rng)
        assert len(population.networks) == 4
        assert population.size == 4
        assert all(isinstance(network, Network) for network in population.networks)
        assert all(network.topology == (5, 3, 2) for network in population.networks)

    @pytest.mark.parametrize("size", [0, 1, 3, 7, None])
    def test_invalid_size_raises(self, size, rng):
        with pytest.raises(ValueError, match="population size"):
            Population(make_config(population_size=size), rng)

    def test_networks_randomized_within_range(self, rng):
        population = Population(make_config(init_min_value=-2.0, init_max_value=2.0), rng)
        for network in population.networks:
            for layer in network.layers:
                assert np.all((layer.weights >= -2.0) & (layer.weights <= 2.0))
                assert layer.weights.any()

    def test_networks_differ(self, small_config, rng):
        population = Population(small_config, rng)
        first, second = population.networks[:2]
        assert not np.array_equal(first.layers[0].weights, second.layers[0].weights)

    def test_one_shared_activation_function(self, small_config, rng):
        population = Population(small_config, rng)
        functions = {id(layer.activation_function) for network in population.networks for layer in network.layers}
        assert len(functions) == 1
        assert isinstance(population.networks[0].layers[0].activation_function, TanhActivation)

    def test_sigmoid_coefficient_from_config(self, rng):
        population = Population(make_config(activation='sigmoid', sigmoid_coefficient=2.0), rng)
        activation = population.networks[0].layers[0].activation_function
        assert isinstance(activation, SigmoidActivation)
        assert activation.coefficient == 2.0

    def test_rng_built_from_seed(self, small_config):
        population1 = Population(small_config)
        population2 = Population(small_config)
        for network1, network2 in zip(population1.networks, population2.networks):
            assert_same_values(network1, network2)

    def test_starts_at_generation_zero(self, small_config, rng):
        assert Population(small_config, rng).generation == 0


# ============================================================================
# Test Fitness Ingestion
# ============================================================================

class TestFitnessIngestion:
    """Test Population.individuals and Population.assign_fitness."""

    def test_individuals_wrap_networks_in_order(self, small_config, rng):
        population = Population(small_config, rng)
        individuals = population.individuals
        assert all(isinstance(individual, Individual) for individual in individuals)
        assert [individual.index for individual in individuals] == [0, 1, 2, 3]
        assert all(ind.network is net for ind, net in zip(individuals, population.networks))

    def test_fitness_through_individuals(self, small_config, rng):
        population = Population(small_config, rng)
        for individual in population.individuals:
            individual.fitness = individual.index * 10
        assert [network.fitness for network in population.networks] == [0.0, 10.0, 20.0, 30.0]

    def test_assign_fitness_sequence(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness([1, 4, 2, 3])
        assert [network.fitness for network in population.networks] == [1.0, 4.0, 2.0, 3.0]

    def test_assign_fitness_mapping(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness({2: 5.0, 0: -1.0})
        assert population.networks[2].fitness == 5.0
        assert population.networks[0].fitness == -1.0
        assert population.networks[1].fitness == 0.0

    @pytest.mark.parametrize("index", [-1, 4])
    def test_assign_fitness_bad_index(self, small_config, rng, index):
        population = Population(small_config, rng)
        with pytest.raises(IndexError):
            population.assign_fitness({index: 1.0})

    def test_get_fittest_network(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness([1, 4, 2, 3])
        assert population.get_fittest_network() is population.networks[1]

    def test_get_fittest_network_empty(self, small_config, rng):
        population = Population(small_config, rng)
        population.networks = []
        assert population.get_fittest_network() is None


# ============================================================================
# Test Evolutionary Operators
# ============================================================================

class TestSelectParents:
    """Test Population.select_parents."""

    def test_descending_fitness(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness([1, 4, 2, 3])
        parents = population.select_parents()
        assert [parent.fitness for parent in parents] == [4.0, 3.0, 2.0, 1.0]

    def test_keeps_whole_population(self, small_config, rng):
        population = Population(small_config, rng)
        parents = population.select_parents()
        assert len(parents) == 4
        assert set(map(id, parents)) == set(map(id, population.networks))

    def test_stable_for_ties(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness([1, 1, 1, 1])
        assert population.select_parents() == population.networks


class TestCrossover:
    """Test Population.crossover."""

    def test_chance_one_copies_parents(self, rng):
        population = Population(make_config(crossover_probability=1.0, crossover_chance=1.0), rng)
        population.assign_fitness([1, 4, 2, 3])
        parents = population.select_parents()
        offspring = population.crossover(parents)

        assert len(offspring) == 4
        for child, parent in zip(offspring, parents):
            assert child is not parent
            assert_same_values(child, parent)

    def test_chance_zero_swaps_parents(self, rng):
        population = Population(make_config(crossover_probability=1.0, crossover_chance=0.0), rng)
        parents = population.select_parents()
        offspring = population.crossover(parents)

        assert_same_values(offspring[0], parents[1])
        assert_same_values(offspring[1], parents[0])
        assert_same_values(offspring[2], parents[3])
        assert_same_values(offspring[3], parents[2])

    def test_mixed_chance_takes_each_value_from_a_parent(self, rng):
        population = Population(make_config(population_size=2, crossover_probability=1.0, crossover_chance=0.5), rng)
        parent1, parent2 = population.select_parents()
        child1, child2 = population.crossover([parent1, parent2])

        for l1, l2, c1, c2 in zip(parent1.layers, parent2.layers, child1.layers, child2.layers):
            from_first = c1.weights == l1.weights
            assert np.all(from_first | (c1.weights == l2.weights))
            # the second child holds the values the first one did not take
            np.testing.assert_array_equal(c2.weights, np.where(from_first, l2.weights, l1.weights))
            np.testing.assert_array_equal(c1.biases + c2.biases, l1.biases + l2.biases)

    def test_probability_zero_gives_no_offspring(self, rng):
        population = Population(make_config(crossover_probability=0.0), rng)
        assert population.crossover(population.select_parents()) == []

    def test_offspring_share_activation_function(self, rng):
        population = Population(make_config(crossover_probability=1.0), rng)
        parents = population.select_parents()
        child = population.crossover(parents)[0]
        assert child.layers[0].activation_function is parents[0].layers[0].activation_function

    def test_parents_unchanged(self, rng):
        population = Population(make_config(crossover_probability=1.0, crossover_chance=0.5), rng)
        parents = population.select_parents()
        before = [network.deep_copy() for network in parents]
        population.crossover(parents)
        for parent, copy in zip(parents, before):
            assert_same_values(parent, copy)


class TestMutate:
    """Test Population.mutate."""

    def test_mutates_each_offspring(self, rng):
        population = Population(make_config(mutation_chance=1.0, mutation_strength=0.1), rng)
        offspring = [network.deep_copy() for network in population.networks]
        population.mutate(offspring)
        for child, network in zip(offspring, population.networks):
            diff = child.layers[0].weights - network.layers[0].weights
            assert np.all(diff != 0.0)
            assert np.all(np.abs(diff) <= 0.1)

    def test_zero_chance_is_noop(self, rng):
        population = Population(make_config(mutation_chance=0.0), rng)
        offspring = [network.deep_copy() for network in population.networks]
        population.mutate(offspring)
        for child, network in zip(offspring, population.networks):
            assert_same_values(child, network)


class TestReinsert:
    """Test Population.reinsert."""

    def test_fills_shortfall_with_best(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness([1, 4, 2, 3])
        old = list(population.networks)
        offspring = [Network(small_config.topology), Network(small_config.topology)]

        population.reinsert(list(offspring))

        assert len(population.networks) == 4
        assert population.networks[:2] == offspring
        assert population.networks[2] is old[1]
        assert population.networks[3] is old[3]

    def test_full_offspring_replaces_everything(self, small_config, rng):
        population = Population(small_config, rng)
        offspring = [Network(small_config.topology) for _ in range(4)]
        population.reinsert(list(offspring))
        assert population.networks == offspring

    def test_increments_generation(self, small_config, rng):
        population = Population(small_config, rng)
        population.reinsert([])
        assert population.generation == 1


# ============================================================================
# Test Generation Transition
# ============================================================================

class TestSpawnNextGeneration:
    """Test Population.spawn_next_generation."""

    @pytest.mark.parametrize("size", [2, 4, 10, 20])
    @pytest.mark.parametrize("probability", [0.0, 0.5, 1.0])
    def test_size_preserved(self, size, probability, rng):
        population = Population(make_config(population_size=size, crossover_probability=probability), rng)
        for _ in range(5):
            population.assign_fitness(rng.uniform(-10, 10, size))
            population.spawn_next_generation()
            assert len(population.networks) == size

    def test_size_preserved_with_equal_fitness(self, rng):
        population = Population(make_config(population_size=6, crossover_probability=0.5), rng)
        for _ in range(3):
            population.assign_fitness([1.0] * 6)
            population.spawn_next_generation()
            assert len(population.networks) == 6

    def test_no_crossover_keeps_previous_generation(self, rng):
        """Topology [5,3,2], fitness [1,4,2,3], no crossover: pure reinsertion."""
        population = Population(make_config(crossover_probability=0.0), rng)
        old = list(population.networks)
        before = [network.deep_copy() for network in old]
        population.assign_fitness([1, 4, 2, 3])

        population.spawn_next_generation()

        assert population.networks == [old[1], old[3], old[2], old[0]]
        for network, copy in zip(old, before):
            assert_same_values(network, copy)   # carried over unmutated

    def test_full_crossover_replaces_every_network(self, rng):
        population = Population(make_config(crossover_probability=1.0), rng)
        old = set(map(id, population.networks))
        population.assign_fitness([1, 4, 2, 3])
        population.spawn_next_generation()
        assert old.isdisjoint(map(id, population.networks))

    def test_reproducible(self):
        config = make_config(crossover_probability=0.5, crossover_chance=0.5, mutation_chance=0.5)
        results = []
        for _ in range(2):
            population = Population(config, np.random.default_rng(3))
            for _ in range(4):
                population.assign_fitness([1, 4, 2, 3])
                population.spawn_next_generation()
            results.append(population.networks[0].layers[0].weights.copy())
        np.testing.assert_array_equal(results[0], results[1])

    def test_generation_counter(self, small_config, rng):
        population = Population(small_config, rng)
        for _ in range(3):
            population.spawn_next_generation()
        assert population.generation == 3


class TestGenerationStats:
    """Test the statistics emitted at each generation transition."""

    def test_returns_stats(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness([1, 4, 2, 3])
        stats = population.spawn_next_generation()

        assert isinstance(stats, GenerationStats)
        assert stats.number == 1
        assert stats.population == 4
        assert stats.max_fitness == 4.0
        assert stats.median_fitness == 2.5
        assert stats.mean_fitness == 2.5
        assert stats.previous_max_fitness == 0.0
        assert stats.previous_median_fitness == 0.0
        assert isinstance(stats.duration, timedelta)
        assert stats.duration >= timedelta(0)

    def test_previous_values_carried(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness([1, 4, 2, 3])
        population.spawn_next_generation()
        population.assign_fitness([0, 0, 0, 8])
        stats = population.spawn_next_generation()

        assert stats.number == 2
        assert stats.max_fitness == 8.0
        assert stats.median_fitness == 0.0
        assert stats.mean_fitness == 2.0
        assert stats.previous_max_fitness == 4.0
        assert stats.previous_median_fitness == 2.5
        assert stats.previous_mean_fitness == 2.5

    def test_negative_fitness_max(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness([-4, -1, -3, -2])
        assert population.spawn_next_generation().max_fitness == -1.0

    def test_listeners_notified(self, small_config, rng):
        population = Population(small_config, rng)
        listener = Mock()
        population.add_listener(listener)
        stats = population.spawn_next_generation()
        listener.assert_called_once_with(stats)

    def test_removed_listener_not_notified(self, small_config, rng):
        population = Population(small_config, rng)
        listener = Mock()
        population.add_listener(listener)
        population.remove_listener(listener)
        population.spawn_next_generation()
        listener.assert_not_called()

    def test_str(self, small_config, rng):
        population = Population(small_config, rng)
        population.assign_fitness([1, 4, 2, 3])
        s = str(population.spawn_next_generation())
        assert "GENERATION 0001" in s
        assert "maximum fitness = 4.0000" in s
