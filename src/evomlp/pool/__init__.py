from evomlp.pool.individual import Individual
from evomlp.pool.population import Population

__all__ = ["Individual", "Population"]
