"""
Trial Module

This module defines the abstract base class for a single neuroevolution run.

A trial creates a population of randomly initialized networks and lets it
evolve, one generation at a time, until the fitness target is met or the
generation budget is spent. Fitness evaluation may be spread over several
processes with joblib.
"""

import numpy as np
from abc        import ABC, abstractmethod
from joblib     import Parallel, delayed
from typing     import TYPE_CHECKING

from evomlp.run.config import Config
from evomlp.pool       import Population
if TYPE_CHECKING:
    from evomlp.pool import Individual

class Trial(ABC):
    """
    Abstract base class for one evolutionary run on a problem.

    All networks share the topology of the [NETWORK] configuration section;
    evolution acts on parameter values only, through crossover and mutation.

    Subclasses must implement:
    - _reset(): Clear problem-specific state, calling super()._reset() first
    - _evaluate_fitness(individual): Score one individual (higher is better)
    - _report_progress(): Show the state of the current generation
    - _final_report(): Show the outcome of the run

    Subclasses can override:
    - _terminate(): Stopping rule (default: generation budget, optionally fitness threshold)

    Public Attributes:
        failed:          True unless the last run reached the fitness threshold
        seed:            Seed for the random generator of the next run (None = seeded by the OS)
        fitness_history: Best fitness of every generation of the last run

    Public Methods:
        run(num_jobs): Evolve a fresh population until the stopping rule holds

    'num_jobs' selects how fitness is evaluated:
        1:  in this process, one individual after the other
        >1: in that many worker processes
        -1: in one worker process per CPU core
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Parameters:
            config:          Configuration parameters
            suppress_output: If True, skip progress and final reports
                             (experiments run many trials silently)
        """
        self._config            : Config              = config
        self._suppress_output   : bool                = suppress_output
        self._population        : Population          = None
        self._rng               : np.random.Generator = None
        self._generation_counter: int                 = 0
        self.seed               : int | None          = config.seed
        self.failed             : bool                = True
        self.fitness_history    : list[float]         = []

    def run(self, num_jobs: int = 1):
        """
        Evolve a new population from scratch.

        Generation 0 is the random initial population; every later generation
        is bred from the previous one. Each generation is evaluated (and
        reported) before the stopping rule is checked.

        Parameters:
            num_jobs: Number of processes evaluating fitness (see class docstring)
        """
        self._reset()
        self._population = Population(self._config, self._rng)
        self._complete_generation(num_jobs)

        while not self._terminate():
            self._generation_counter += 1
            self._population.spawn_next_generation()
            self._complete_generation(num_jobs)

        if not self._suppress_output:
            self._final_report()

    def _complete_generation(self, num_jobs: int):
        """Evaluate the current generation, record its best fitness and report on it."""
        self._evaluate_fitness_all(num_jobs)
        self.fitness_history.append(self._best_fitness())
        if not self._suppress_output:
            self._report_progress()

    @abstractmethod
    def _reset(self):
        """
        Prepare for a new run: fresh random generator, counters and history.

        Overriding methods call super()._reset() before setting up their own data.
        """
        self._rng                = np.random.default_rng(self.seed)
        self._generation_counter = 0
        self.failed              = True
        self.fitness_history     = []

    @abstractmethod
    def _evaluate_fitness(self, individual: 'Individual') -> float:
        """
        Score one individual on the problem.

        The score drives selection: individuals with a higher fitness are
        more likely to survive and to pass their weights on.

        Parameters:
            individual: The individual whose network is tested

        Returns:
            float: The fitness of the individual
        """
        pass

    def _evaluate_fitness_all(self, num_jobs: int):
        """
        Store a freshly computed fitness in every individual of the population.

        Parameters:
            num_jobs: Number of processes evaluating fitness
        """
        individuals = self._population.individuals

        if num_jobs == 1:
            scores = [self._evaluate_fitness(individual) for individual in individuals]
        else:
            scores = Parallel(num_jobs)(delayed(self._evaluate_fitness)(i) for i in individuals)

        for individual, score in zip(individuals, scores):
            individual.fitness = score

    def _best_fitness(self) -> float:
        return max(individual.fitness for individual in self._population.individuals)

    @abstractmethod
    def _report_progress(self):
        """
        Show the state of the current generation.

        Not called when the trial was created with 'suppress_output=True'.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Show the outcome of the run.

        Not called when the trial was created with 'suppress_output=True'.
        """
        pass

    def _terminate(self) -> bool:
        """
        Decide whether the run is over.

        The run stops once 'max_number_generations' generations have been
        bred. If 'fitness_termination_check' is set it also stops as soon as
        the best fitness reaches 'fitness_threshold', which marks the trial
        as successful.

        Returns:
            bool: True to stop, False to breed another generation
        """
        out_of_generations = self._generation_counter >= self._config.max_number_generations

        if not self._config.fitness_termination_check:
            return out_of_generations

        solved = self._best_fitness() >= self._config.fitness_threshold
        if solved or out_of_generations:
            self.failed = not solved
            return True
        return False

    @property
    def population(self) -> Population:
        """The population evolved by the last run (None before the first run)."""
        return self._population

    @property
    def generation_counter(self) -> int:
        """Number of generations bred so far in the current run."""
        return self._generation_counter
