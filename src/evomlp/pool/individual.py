"""
Individual Module

This module implements the Individual class, a member of an evolving population.

Classes:
    Individual: A network together with a unique ID and a fitness
"""

from itertools import count
from typing    import Optional

from evomlp.network import Network

class Individual:
    """
    An individual organism in an evolving population.

    You can regard an individual as a thin wrapper around the network that powers
    it, to which it adds a unique ID and a fitness. Populations operate on
    Individual(s), which are evaluated, compared, and reproduced to create
    offspring through crossover and mutation.

    Public Attributes:
        ID:      Globally unique identifier for this individual
        fitness: Fitness score (None until evaluated)
        network: The Network powering this individual

    Public Methods:
        clone(): Create a new Individual powered by a copy of this network
    """

    _id_generator = count(0)

    def __init__(self, network: Network):
        """
        Parameters:
            network: The Network powering this Individual
        """
        self.ID     : int             = next(Individual._id_generator)  # unique ID
        self.fitness: Optional[float] = None                            # fitness used when reproducing
        self.network: Network         = network

    def clone(self) -> 'Individual':
        """
        Create a new Individual (with a new ID and no fitness) from a deep copy of this network.
        """
        return Individual(self.network.clone())

    def __repr__(self):
        return f"Individual(ID={self.ID}, fitness={self.fitness}, network={self.network!r})"
