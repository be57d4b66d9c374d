"""
XOR Problem Implementation

This module evolves the weights of a small feedforward network until it
computes XOR (exclusive OR), a classic benchmark that cannot be solved
without a hidden layer:
    Input (0, 0) → Output 0
    Input (0, 1) → Output 1
    Input (1, 0) → Output 1
    Input (1, 1) → Output 0

Fitness Function:
    Fitness = 4.0 - Σ(output - target)²

    Maximum fitness of 4.0 is achieved when all four XOR cases produce exact outputs.

Classes:
    Trial_XOR:      Trial evolving a network that solves XOR
    Experiment_XOR: Multi-trial experiment for XOR with statistical analysis

Usage:
    Single Trial:
        config = Config("examples/configs/config_xor.ini")
        trial = Trial_XOR(config)
        trial.run()

    Experiment (Multiple Trials):
        config = Config("examples/configs/config_xor.ini")
        experiment = Experiment_XOR(num_trials=20, config=config)
        experiment.run(num_jobs=-1)
"""

import numpy as np
import sys
from pathlib    import Path

from evonet.run.config import Config
from evonet.phenotype  import Individual
from evonet.run        import Experiment, Trial

class Trial_XOR(Trial):
    """
    Trial evolving the weights of a network until it computes XOR.

    Implemented Methods:
        _evaluate_fitness(individual): Test network on all 4 XOR cases
        _report_progress(): Display generation statistics and XOR truth table
        _final_report(): Visualize the evolved network
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        super().__init__(config, suppress_output)

        self.xor_inputs  = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
        self.xor_outputs = np.array([0.0, 1.0, 1.0, 0.0])

    def _reset(self):
        """Reset trial state."""
        return super()._reset()

    def _evaluate_fitness(self, individual: Individual) -> float:
        fitness = 4.0  # max possible fitness
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            output   = individual.feed_forward(inputs)   # forward pass through network
            fitness -= (output[0] - expected_output) ** 2
        return float(fitness)

    def _report_progress(self):
        """
        Print a report describing the current generation.
        """
        fittest = self._population.get_fittest_network()

        s  = f"===============\n"
        s += f"GENERATION {self._generation_counter:04d}\n"
        s += f"population size = {len(self._population.networks)}\n"
        s += f"maximum fitness = {fittest.fitness:.4f}\n"
        if self.last_stats is not None:
            s += f"median fitness  = {self.last_stats.median_fitness:.4f} (previous generation)\n"
        s += '\n'

        s += "input         output   target  error\n"
        s += "------------------------------------\n"
        for inputs, target in zip(self.xor_inputs, self.xor_outputs):
            output = fittest.feed_forward(inputs)[0]
            s += f"{inputs.tolist()} -> {output:.4f}    {target}   {abs(output - target):.4f}\n"

        print(s)

    def _final_report(self):
        """
        Display results at the end of the trial.
        """
        fittest = self._population.get_fittest_network()
        print(fittest)

        # Visualize the network
        try:
            fittest.visualize(view=True)
            print("Network visualization saved as 'Digraph.gv.pdf'")
        except Exception as e:
            print(f"Could not visualize network: {e}")

class Experiment_XOR(Experiment):

    def __init__(self, num_trials: int, config: Config):
        super().__init__(Trial_XOR, num_trials, config)

    def _reset(self):
        super()._reset()

    def _prepare_trial(self, trial: Trial_XOR, trial_number: int):
        # the default implementation prints a progress report.
        super()._prepare_trial(trial, trial_number)

    def _extract_trial_results(self, trial: Trial_XOR, trial_number: int) -> dict:
        return super()._extract_trial_results(trial, trial_number)

    def _analyze_trial_results(self, results: dict):
        super()._analyze_trial_results(results)

        s  = f"Trial {results['trial_number']:03d}: "
        s += f"max fitness={results['max_fitness']:.2f}, "
        s += f"mean fitness={results['mean_fitness']:.2f}, "
        s += f"generations={results['number_generations']:3} "
        s += "[SUCCESS]" if results['success'] else "[FAILED]"
        print(s)

    def _final_report(self):
        summary = self.summary()

        s  = "\nSUMMARY:\n"
        s += f"Total trials          = {summary['trials']}\n"
        s += f"Success rate          = {100*summary['success_rate']:.0f}%\n"
        if summary['successes']:
            s += f"Avg # generations     = {summary['mean_generations_to_success']:.0f}\n"
        else:
            s += "No successful trials\n"
        if summary['trials']:
            s += f"Avg max fitness       = {summary['mean_max_fitness']:.2f}\n"
            s += f"Best fitness          = {summary['best_fitness']:.4f} (trial {summary['best_trial']:03d})\n"
        print(s)

if __name__ == "__main__":
    config = Config(str(Path(__file__).parent / "configs" / "config_xor.ini"))

    if len(sys.argv) > 1 and sys.argv[1] == "experiment":
        Experiment_XOR(num_trials=20, config=config).run(num_jobs=-1)
    else:
        Trial_XOR(config).run()
