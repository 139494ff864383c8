"""
Population Module

This module implements the Population class, the container of the individuals
evolved by a Trial.

Classes:
    Population: A fixed-size, fixed-topology population of evolving networks
"""

import math
import numpy as np
from typing import TYPE_CHECKING

from evomlp.network         import Network
from evomlp.pool.individual import Individual

if TYPE_CHECKING:
    from evomlp.run.config import Config

class Population:
    """
    A population of evolving individuals, all sharing the same network topology.

    Reproduction uses truncation selection: the fittest individuals survive
    unchanged (elitism), and the rest of the next generation is bred from the
    top fraction of the current one. Each offspring is the crossover of two
    distinct parents, followed by weight and "bias" mutation.

    Public Attributes:
        individuals: List of all Individual objects in the current generation

    Public Methods:
        get_fittest_individual(): Return the individual with highest fitness
        spawn_next_generation():  Create the next generation through selection and reproduction
    """

    def __init__(self, config: 'Config', rng: np.random.Generator):
        """
        Initialize the population with 'population_size' randomly initialized networks.

        Parameters:
            config: Stores configuration parameters
            rng:    Random generator shared by initialization and reproduction
        """
        self._config = config
        self._rng    = rng

        self.individuals: list[Individual] = \
            [Individual(Network.from_config(config, rng)) for _ in range(config.population_size)]

    def get_fittest_individual(self) -> 'Individual | None':
        """
        Find and return the individual with the highest fitness in the population.
        Assumes that the fitness of each Individual has already been calculated
        and saved inside each of them.

        Returns:
            The individual with the highest fitness value, or None if population
            is empty, or the fitness of individuals has not been calculated yet
        """
        if not self.individuals:
            return None

        # 'max' raises a TypeError if called on a list that contains 'None'
        # in our case, this happens if the individual fitness has not been
        # evaluated yet.
        try:
            return max(self.individuals, key=lambda ind: ind.fitness)
        except TypeError:
            return None

    def spawn_next_generation(self):
        """
        Replace the current generation by the next one.

        Step 1: Ranking
        - Sort the individuals by decreasing fitness

        Step 2: Elitism
        - Copy the 'elitism' fittest individuals unchanged into the next generation

        Step 3: Reproduction
        - Only the top 'survival_threshold' fraction may reproduce (at least 2)
        - Each offspring crosses two distinct random parents, then is mutated
        """
        size   = self._config.population_size
        ranked = sorted(self.individuals, key=lambda ind: ind.fitness, reverse=True)

        # The elite survive unchanged
        offspring = [ind.clone() for ind in ranked[:min(self._config.elitism, size)]]

        # The parents are the fittest fraction of the population
        num_parents = max(2, math.ceil(self._config.survival_threshold * len(ranked)))
        parents     = ranked[:num_parents]

        while len(offspring) < size:
            if len(parents) > 1:
                i, j = self._rng.choice(len(parents), size=2, replace=False)
            else:
                i = j = 0
            child = parents[i].network.crossover(parents[j].network, self._rng)
            child.mutate_weights(self._config.weight_mutation_chance, self._rng)
            child.mutate_biases(self._config.bias_mutation_chance, self._rng)
            offspring.append(Individual(child))

        self.individuals = offspring

    def __str__(self):
        return '\n'.join(repr(individual) for individual in self.individuals)
