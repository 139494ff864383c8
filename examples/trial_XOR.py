"""
XOR Example

Exclusive OR is the smallest problem a network without hidden layers cannot
solve: the two classes are not linearly separable.

    (0, 0) -> 0
    (0, 1) -> 1
    (1, 0) -> 1
    (1, 1) -> 0

It is solved here in three ways: gradient training alone, evolution alone,
and evolution whose best networks are also trained (enable_gradient = True
in the configuration file).

Every network is scored as
    fitness = 4 - sum over the four cases of (output - target)^2
so a perfect network scores 4.

Classes:
    Trial_XOR:      One evolutionary run on XOR
    Experiment_XOR: Many runs on XOR, with a success summary

Functions:
    train_xor(config, epochs): Train a single network by backpropagation

Usage:
    network = train_xor(Config("examples/configs/config_xor.ini"), epochs=2000)

    trial = Trial_XOR(Config("examples/configs/config_xor.ini"))
    trial.run(num_jobs=4)

    experiment = Experiment_XOR(num_trials=100, config=Config("examples/configs/config_xor.ini"))
    experiment.run(num_jobs_trials=-1)
"""

from statistics import mean

import graphviz
import numpy as np

from evomlp.network    import Network
from evomlp.pool       import Individual
from evomlp.run        import Experiment, TrialGrad, train_epochs
from evomlp.run.config import Config

XOR_INPUTS  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
XOR_OUTPUTS = [[0.0],      [1.0],      [1.0],      [0.0]]

def xor_fitness(network: Network) -> float:
    """4 minus the squared error summed over the four cases."""
    fitness = 4.0
    for inputs, target in zip(XOR_INPUTS, XOR_OUTPUTS):
        fitness -= (network.process(inputs)[0] - target[0]) ** 2
    return fitness

def xor_table(network: Network) -> str:
    """The truth table computed by 'network', next to the expected one."""
    s  = "input         output   target  error\n"
    s += "------------------------------------\n"
    for inputs, target in zip(XOR_INPUTS, XOR_OUTPUTS):
        output = network.process(inputs)[0]
        s += f"{inputs} -> {output:.4f}    {target[0]}   {abs(output - target[0]):.4f}\n"
    return s

def train_xor(config: Config, epochs: int = 2000) -> Network:
    """
    Build a network from 'config' and train it on the four cases.

    Each epoch presents the cases once, always in the same order.

    Parameters:
        config: provides topology, activation, learning rate and seed
        epochs: number of passes over the four cases

    Returns:
        the trained network
    """
    network = Network.from_config(config, np.random.default_rng(config.seed))
    return train_epochs(network, XOR_INPUTS, XOR_OUTPUTS, epochs)

class Trial_XOR(TrialGrad):
    """
    Evolves networks computing XOR.

    The four cases double as training data when backpropagation is enabled.
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        super().__init__(config, suppress_output)

    def _reset(self):
        super()._reset()

    def _get_training_data(self):
        return XOR_INPUTS, XOR_OUTPUTS

    def _evaluate_fitness(self, individual: Individual) -> float:
        return xor_fitness(individual.network)

    def _report_progress(self):
        """
        Print the size of the generation, how many of its members were trained,
        its best fitness, and the truth table of its best network.
        """
        fittest = self._population.get_fittest_individual()

        s  = f"===============\n"
        s += f"GENERATION {self._generation_counter:04d}\n"
        s += f"population size = {len(self._population.individuals)}\n"
        s += f"trained         = {self._number_trained}\n"
        s += f"maximum fitness = {fittest.fitness:.4f}\n"
        s += '\n'
        s += xor_table(fittest.network)

        print(s)

    def _final_report(self):
        """
        Print how the best fitness evolved and draw the best network.
        """
        start, end = self.fitness_history[0], self.fitness_history[-1]
        outcome = "solved" if not self.failed else "not solved"
        print(f"Best fitness went from {start:.4f} to {end:.4f} "
              f"in {self._generation_counter} generations ({outcome})")

        fittest = self._population.get_fittest_individual()
        try:
            fittest.network.visualize(view=True)
            print("Network drawing written to 'Digraph.gv.pdf'")
        except graphviz.ExecutableNotFound as e:
            print(f"Could not draw the network: {e}")

class Experiment_XOR(Experiment):
    """
    Repeats Trial_XOR and reports how often, and how fast, XOR gets solved.
    """

    def __init__(self, num_trials: int, config: Config):
        super().__init__(Trial_XOR, num_trials, config)

    def _reset(self):
        super()._reset()

    def _prepare_trial(self, trial: Trial_XOR, trial_number: int):
        # every trial uses the configuration as is
        super()._prepare_trial(trial, trial_number)

    def _extract_trial_results(self, trial: Trial_XOR, trial_number: int) -> dict:
        return super()._extract_trial_results(trial, trial_number)

    def _analyze_trial_results(self, results: dict):
        """
        Record one outcome and print it on a single line.
        """
        super()._analyze_trial_results(results)

        status = "[SUCCESS]" if results['success'] else "[FAILED]"
        print(f"Trial {results['trial_number']:03d}: "
              f"max fitness={results['max_fitness']:.2f}, "
              f"generations={results['number_generations']:3} {status}")

    def _final_report(self):
        """
        Print the success rate, and averages over the successful trials.
        """
        lines = ["",
                 "SUMMARY:",
                 f"Trials                = {self._trial_counter}",
                 f"Success rate          = {100 * self.success_rate:.0f}%"]

        if self._number_generations:
            lines.append(f"Avg # generations     = {mean(self._number_generations):.0f}")
            lines.append(f"Avg max fitness       = {mean(self._max_fitness):.2f}")
        else:
            lines.append("No trial solved XOR, no averages to show")

        print("\n".join(lines))
