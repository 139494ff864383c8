"""
Unit tests for Experiment abstract base class.
"""

from unittest.mock import MagicMock, patch

import pytest
from evomlp.run.config     import Config
from evomlp.run.experiment import Experiment
from evomlp.run.trial      import Trial


# ============================================================================
# Concrete Implementations for Testing
# ============================================================================

class ConcreteTrial(Trial):
    """Trial whose individuals all have the same fitness."""

    def __init__(self, config, suppress_output=False, fitness=1.0):
        super().__init__(config, suppress_output)
        self._fitness = fitness

    def _reset(self):
        super()._reset()

    def _evaluate_fitness(self, individual):
        return self._fitness

    def _report_progress(self):
        pass

    def _final_report(self):
        pass


class ConcreteExperiment(Experiment):
    """Concrete implementation of Experiment for testing purposes."""

    def _reset(self):
        super()._reset()
        self.prepared    = []
        self.analyzed    = []
        self.report_made = False

    def _prepare_trial(self, trial, trial_number):
        self.prepared.append((trial_number, trial.seed))

    def _extract_trial_results(self, trial, trial_number):
        results = super()._extract_trial_results(trial, trial_number)
        results["population_size"] = len(trial.population.individuals)
        return results

    def _analyze_trial_results(self, results):
        super()._analyze_trial_results(results)
        self.analyzed.append(results)

    def _final_report(self):
        self.report_made = True


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def config():
    config = Config()
    config.input_nodes               = 2
    config.hidden_layers             = 1
    config.hidden_nodes              = 2
    config.output_nodes              = 1
    config.population_size           = 4
    config.elitism                   = 1
    config.survival_threshold        = 0.5
    config.max_number_generations    = 2
    config.fitness_termination_check = True
    config.fitness_threshold         = 5.0
    config.seed                      = 100
    return config


# ============================================================================
# Test Experiment run
# ============================================================================

class TestExperimentRun:
    """Test Experiment.run method."""

    def test_runs_every_trial(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 3, config)
        experiment.run()

        assert experiment._trial_counter == 3
        assert [n for n, _ in experiment.prepared] == [1, 2, 3]
        assert [r["trial_number"] for r in experiment.analyzed] == [1, 2, 3]
        assert experiment.report_made

    def test_trial_results(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 1, config)
        experiment.run()

        results = experiment.analyzed[0]
        assert results["number_generations"] == 2
        assert results["max_fitness"] == 1.0
        assert results["success"] is False
        assert results["population_size"] == 4

    def test_failed_trials_not_counted(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 2, config)
        experiment.run()

        assert experiment._success_counter == 0
        assert experiment._number_generations == []
        assert experiment._max_fitness == []

    def test_successful_trials_counted(self, config):
        """Test that trial kwargs are forwarded and successes recorded."""
        experiment = ConcreteExperiment(ConcreteTrial, 2, config, fitness=7.0)
        experiment.run()

        assert experiment._success_counter == 2
        assert experiment._number_generations == [0, 0]
        assert experiment._max_fitness == [7.0, 7.0]

    def test_results_and_success_rate(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 2, config, fitness=7.0)
        assert experiment.success_rate == 0.0

        experiment.run()

        assert [r["trial_number"] for r in experiment.results] == [1, 2]
        assert experiment.success_rate == 1.0

    def test_rerun_resets_state(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 2, config, fitness=7.0)
        experiment.run()
        experiment.run()

        assert experiment._success_counter == 2
        assert len(experiment.analyzed) == 2


# ============================================================================
# Test Experiment seeding
# ============================================================================

class TestExperimentSeeding:
    """Test that each trial gets its own random stream."""

    def test_trial_seeds(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 3, config)
        experiment.run()
        assert [seed for _, seed in experiment.prepared] == [101, 102, 103]

    def test_no_seed(self, config):
        config.seed = None
        experiment = ConcreteExperiment(ConcreteTrial, 2, config)
        experiment.run()
        assert [seed for _, seed in experiment.prepared] == [None, None]


# ============================================================================
# Test Experiment parallel execution
# ============================================================================

class TestExperimentParallel:
    """Test trial-level parallelization."""

    def test_parallel_trials(self, config):
        results = [{"trial_number": n, "number_generations": 1, "max_fitness": 6.0, "success": True}
                   for n in (1, 2, 3)]
        experiment = ConcreteExperiment(ConcreteTrial, 3, config)

        # Mock Parallel to avoid actual parallelization
        with patch('evomlp.run.experiment.Parallel') as mock_parallel:
            mock_parallel.return_value = MagicMock(return_value=results)
            experiment.run(num_jobs_trials=2)

        mock_parallel.assert_called_once_with(2)
        assert experiment._trial_counter == 3
        assert experiment._success_counter == 3
        assert experiment.analyzed == results
