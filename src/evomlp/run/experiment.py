"""
Experiment Module

This module defines the abstract base class for experiments: batches of
independent trials whose outcomes are collected and summarized.

An experiment answers questions a single trial cannot, such as how often a
configuration solves a problem and how many generations it typically needs.
Trials can be executed one after the other or spread over processes with joblib.
"""

from abc    import ABC, abstractmethod
from joblib import Parallel, delayed
from sys    import stdout
from typing import Type

from evomlp.run.config import Config
from evomlp.run.trial  import Trial

class Experiment(ABC):
    """
    Abstract base class for running a batch of trials.

    Every trial builds and evolves its own population, so no network is ever
    shared between trials and they may run in separate processes. If the
    configuration holds a seed, trial N uses 'seed + N': trials differ from
    one another, yet re-running the experiment reproduces every one of them.

    Subclasses must implement:
    - _reset(): Clear experiment-specific state, calling super()._reset()
    - _prepare_trial(trial, trial_number): Adjust a trial before it runs
    - _extract_trial_results(trial, trial_number): Collect the outcome of a finished trial
    - _analyze_trial_results(results): Record (and usually print) one outcome
    - _final_report(): Summarize the whole experiment

    Public Properties:
        results:      The outcome dictionaries of the last run, in trial order
        success_rate: Fraction of trials that reached the fitness threshold

    Public Methods:
        run(num_jobs_trials=1, num_jobs_fitness=1): Run every trial and report

    Parallelization:
        num_jobs_trials:  processes running whole trials (1 = serial, -1 = all cores)
        num_jobs_fitness: processes evaluating fitness inside each trial; keep it at 1
                          when trials already run in parallel
    """

    def __init__(self, trial_class: Type[Trial], num_trials: int, config: Config,
                 *args, **kwargs):
        """
        Parameters:
            trial_class: concrete Trial subclass instantiated for every trial
            num_trials:  how many trials to run
            config:      configuration shared by all trials
            *args:       extra positional arguments for the trial constructor
            **kwargs:    extra keyword arguments for the trial constructor
        """
        self._trial_class: Type[Trial] = trial_class
        self._num_trials : int         = num_trials
        self._config     : Config      = config
        self._trial_args               = args
        self._trial_kwargs             = kwargs

        self._results        : list[dict] = []
        self._trial_counter  : int        = 0  # trials completed
        self._success_counter: int        = 0  # trials that reached the fitness threshold

        # statistics over successful trials only
        self._number_generations: list[int]   = []
        self._max_fitness       : list[float] = []

    @property
    def results(self) -> list[dict]:
        return self._results

    @property
    def success_rate(self) -> float:
        if self._trial_counter == 0:
            return 0.0
        return self._success_counter / self._trial_counter

    @abstractmethod
    def _reset(self):
        """
        Clear all statistics gathered by a previous run.
        """
        self._results            = []
        self._trial_counter      = 0
        self._success_counter    = 0
        self._number_generations = []
        self._max_fitness        = []

    def run(self, num_jobs_trials: int = 1, num_jobs_fitness: int = 1):
        """
        Run all trials, then analyze their outcomes and produce the final report.

        Parameters:
            num_jobs_trials:  number of processes running trials
            num_jobs_fitness: number of processes evaluating fitness within each trial
        """
        self._reset()

        trial_numbers = range(1, self._num_trials + 1)
        if num_jobs_trials == 1:
            outcomes = [self._run_trial(n, num_jobs_fitness) for n in trial_numbers]
        else:
            outcomes = Parallel(num_jobs_trials)(
                delayed(self._run_trial)(n, num_jobs_fitness) for n in trial_numbers)
        self._trial_counter = self._num_trials

        for outcome in outcomes:
            self._results.append(outcome)
            self._analyze_trial_results(outcome)
        self._final_report()

    def _run_trial(self, trial_number: int, num_jobs: int = 1) -> dict:
        """
        Build, seed, prepare and run one trial; return its outcome.

        Parameters:
            trial_number: 1-based index of the trial
            num_jobs:     number of processes evaluating fitness within the trial
        """
        trial = self._trial_class(*self._trial_args, config=self._config,
                                  suppress_output=True, **self._trial_kwargs)

        if self._config.seed is not None:
            trial.seed = self._config.seed + trial_number

        self._prepare_trial(trial, trial_number)
        trial.run(num_jobs)
        return self._extract_trial_results(trial, trial_number)

    @abstractmethod
    def _prepare_trial(self, trial: Trial, trial_number: int):
        """
        Adjust a trial (typically its configuration) just before it runs.

        The base implementation only shows which trial is starting;
        overriding methods may skip calling it.
        """
        stdout.write(f"Starting trial {trial_number:03d} of {self._num_trials}...\r")
        stdout.flush()

    @abstractmethod
    def _extract_trial_results(self, trial: Trial, trial_number: int) -> dict:
        """
        Collect the outcome of a finished trial.

        Returns a dictionary with the keys 'trial_number', 'number_generations',
        'max_fitness' and 'success'. Overriding methods MUST call this method
        and may add keys of their own.
        """
        fittest = trial.population.get_fittest_individual()
        return {
            "trial_number"      : trial_number,
            "number_generations": trial.generation_counter,
            "max_fitness"       : fittest.fitness,
            "success"           : not trial.failed,
        }

    @abstractmethod
    def _analyze_trial_results(self, results: dict):
        """
        Record the outcome of one trial.

        Successful trials contribute to the generation and fitness statistics.
        Overriding methods MUST call this method.
        """
        if results["success"]:
            self._success_counter += 1
            self._number_generations.append(results["number_generations"])
            self._max_fitness.append(results["max_fitness"])

    @abstractmethod
    def _final_report(self):
        """
        Summarize the outcomes of all trials.
        """
        pass
