"""
Trial with Gradient Descent Module

This module defines an abstract base class for trials that combine evolutionary
search with backpropagation training.

TrialGrad extends the base Trial class to add optional training phases, allowing
for hybrid optimization strategies where evolution explores the parameter space
while backpropagation fine-tunes the most promising networks. Trained parameters
stay in the network, so they are inherited by offspring.

Classes:
    TrialGrad: Abstract base class combining evolution with backpropagation

Functions:
    train_epochs(network, inputs, targets, epochs): Plain stochastic training loop
"""

from abc    import abstractmethod
from joblib import Parallel, delayed
from typing import Sequence, TYPE_CHECKING

from evomlp.network    import Network
from evomlp.run.config import Config
from evomlp.run.trial  import Trial
if TYPE_CHECKING:
    from evomlp.pool import Individual

def train_epochs(network : Network,
                 inputs  : Sequence[Sequence[float]],
                 targets : Sequence[Sequence[float]],
                 epochs  : int) -> Network:
    """
    Train a network for a number of epochs, one sample at a time.

    Each epoch visits every (input, target) pair once, in order, and applies
    one 'Network.train' step per pair.

    Parameters:
        network: the network to train (modified in place)
        inputs:  the training inputs
        targets: the expected outputs, one per input
        epochs:  number of passes over the training data

    Returns:
        the trained network
    """
    for _ in range(epochs):
        for x, y in zip(inputs, targets):
            network.train(x, y)
    return network

class TrialGrad(Trial):
    """
    Abstract base class for trials with backpropagation support.

    Subclasses must implement (in addition to Trial requirements):
    - _get_training_data(): Provide the (inputs, targets) used for training

    Training Configuration (via Config.GRADIENT_DESCENT section):
        enable_gradient:    Whether to train individuals at all (default: False)
        gradient_epochs:    Passes over the training data per application (default: 10)
        gradient_frequency: Apply training every N generations (default: 1)
        gradient_selection: Which individuals to train ('all', 'top_k')
        gradient_top_k:     Number of top individuals to train (default: 5)

    The learning rate is the one of each network ([NETWORK] learning_rate).

    Public Methods (inherited from Trial):
        run(): Execute a complete trial with optional backpropagation
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the gradient-enabled trial.

        Parameters:
            config:          Configuration parameters (including gradient descent settings)
            suppress_output: If True, suppress progress and final reports
        """
        super().__init__(config, suppress_output)

        # How many individuals were trained in the most recent generation
        self._number_trained: int = 0

    @abstractmethod
    def _get_training_data(self) -> tuple[Sequence[Sequence[float]], Sequence[Sequence[float]]]:
        """
        Return the training data as a pair (inputs, targets).

        Returns:
            inputs:  list of input vectors (each as long as the number of input nodes)
            targets: list of target vectors (each as long as the number of output nodes)
        """
        pass

    def _evaluate_fitness_all(self, num_jobs: int):
        """
        Evaluate fitness for all individuals, training some of them first.

        The population is first evaluated as usual. If training applies to the
        current generation, the selected individuals are trained and then
        re-evaluated, so that their fitness reflects the trained parameters.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation and training
        """
        super()._evaluate_fitness_all(num_jobs)

        self._number_trained = 0
        if not self._should_train():
            return

        selected = self._select_for_training()
        self._train_individuals(selected, num_jobs)
        self._number_trained = len(selected)

        super()._evaluate_fitness_all(num_jobs)

    def _should_train(self) -> bool:
        """Whether training is enabled and due in the current generation."""
        return (self._config.enable_gradient and
                self._generation_counter % self._config.gradient_frequency == 0)

    def _select_for_training(self) -> list['Individual']:
        """
        Choose the individuals to train, according to 'gradient_selection'.
        """
        individuals = self._population.individuals

        if self._config.gradient_selection == 'all':
            return list(individuals)
        elif self._config.gradient_selection == 'top_k':
            ranked = sorted(individuals, key=lambda ind: ind.fitness, reverse=True)
            return ranked[:self._config.gradient_top_k]
        else:
            raise ValueError(f"Unknown gradient_selection: {self._config.gradient_selection}")

    def _train_individuals(self, individuals: list['Individual'], num_jobs: int):
        """
        Train the networks of the given individuals.

        When running in parallel each worker trains its own copy of a network;
        the trained copies are sent back and replace the originals.

        Parameters:
            individuals: the individuals to train
            num_jobs:    Number of parallel processes (1 = serial)
        """
        inputs, targets = self._get_training_data()
        epochs = self._config.gradient_epochs

        if num_jobs == 1:
            for individual in individuals:
                train_epochs(individual.network, inputs, targets, epochs)
        else:
            trained = Parallel(num_jobs)(
                delayed(train_epochs)(ind.network.clone(), inputs, targets, epochs) for ind in individuals)
            for individual, network in zip(individuals, trained):
                individual.network = network
