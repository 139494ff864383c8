#!/usr/bin/env python3
"""
Utility script to run the XOR example easily.

Usage:
    python scripts/run_example.py backprop --epochs 2000
    python scripts/run_example.py trial
    python scripts/run_example.py experiment --num-trials 30 --num-jobs 4
"""

import sys
import argparse
import logging
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from evomlp import Config
from examples.trial_XOR import Trial_XOR, Experiment_XOR, train_xor, xor_table

DEFAULT_CONFIG = 'examples/configs/config_xor.ini'

def main():
    parser = argparse.ArgumentParser(description='Solve XOR with a multi-layer perceptron')
    parser.add_argument('mode', choices=['backprop', 'trial', 'experiment'],
                        help='Train one network, evolve a population, or run many evolution trials')
    parser.add_argument('--config', default=DEFAULT_CONFIG,
                        help='Configuration file')
    parser.add_argument('--epochs', type=int, default=2000,
                        help='Number of training epochs (backprop mode)')
    parser.add_argument('--save', default=None,
                        help='File receiving the trained parameters (backprop mode)')
    parser.add_argument('--num-trials', type=int, default=30,
                        help='Number of trials for experiment mode')
    parser.add_argument('--num-jobs', type=int, default=1,
                        help='Number of parallel jobs')
    parser.add_argument('--verbose', action='store_true',
                        help='Show library log messages')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    config = Config(args.config)
    print(f"Mode: {args.mode}")

    if args.mode == 'backprop':
        network = train_xor(config, args.epochs)
        print(xor_table(network))
        if args.save:
            network.write_to(args.save)
            print(f"Parameters saved to '{args.save}'")
    elif args.mode == 'trial':
        trial = Trial_XOR(config)
        trial.run(num_jobs=args.num_jobs)
        print(f"\nBest fitness: {trial.population.get_fittest_individual().fitness:.4f}")
    else:
        experiment = Experiment_XOR(num_trials=args.num_trials, config=config)
        experiment.run(num_jobs_trials=args.num_jobs, num_jobs_fitness=1)


if __name__ == '__main__':
    main()
