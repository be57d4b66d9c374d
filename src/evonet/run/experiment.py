"""
Experiment Module

This module defines the abstract base class for experiments: a batch of
independent trials on the same problem, optionally run in parallel with
joblib, whose outcomes are gathered into one summary.
"""

from abc        import ABC, abstractmethod
from joblib     import Parallel, delayed
from statistics import mean, median
from sys        import stdout
from typing     import Type

from evonet.run.config import Config
from evonet.run.trial  import Trial

class Experiment(ABC):
    """
    Abstract base class for implementing an experiment.

    Each trial is condensed into a results dict (see _extract_trial_results())
    describing how long it ran, whether it succeeded, how the fitness of its
    final generation was distributed, and the shape of its fittest network.
    The dicts are kept in trial order in 'trial_results'; summary() aggregates them.

    Subclasses must implement:
    - _reset(), _prepare_trial(), _extract_trial_results(), _analyze_trial_results(),
      each calling the base implementation where it has one
    - _final_report()

    Public Attributes:
        trial_results: One results dict per finished trial

    Public Methods:
        run(num_jobs=1): Run every trial; num_jobs is passed to joblib (-1 = all cores)
        summary():       Aggregate statistics over the finished trials
    """

    def __init__(self, trial_class: Type[Trial], num_trials: int, config: Config,
                 *args, **kwargs):
        """
        Parameters:
            trial_class: the class describing the trials in this experiment
            num_trials:  number of trials in this experiment
            config:      configuration parameters
            *args:       positional arguments to pass to trial class constructor
            **kwargs:    keyword arguments to pass to trial class constructor
        """
        self._num_trials  = num_trials
        self._trial_class = trial_class
        self._config      = config
        self._trial_args   = args
        self._trial_kwargs = kwargs

        self._trial_counter  : int = 0
        self._success_counter: int = 0
        self.trial_results   : list[dict] = []

    @abstractmethod
    def _reset(self):
        self._trial_counter   = 0
        self._success_counter = 0
        self.trial_results    = []

    def run(self, num_jobs: int = 1):
        """
        Run the experiment.

        Parameters:
            num_jobs: 1 runs the trials one after the other, in this process;
                      anything else is the number of joblib workers (-1 = all cores)
        """
        self._reset()

        if num_jobs == 1:
            results = []
            for trial_number in range(1, self._num_trials + 1):
                self._trial_counter = trial_number
                results.append(self._run_trial(trial_number))
        else:
            results = Parallel(num_jobs)(
                delayed(self._run_trial)(n) for n in range(1, self._num_trials + 1)
            )
            self._trial_counter = self._num_trials

        for results_of_trial in results:
            self._analyze_trial_results(results_of_trial)
        self._final_report()

    def _run_trial(self, trial_number: int) -> dict:
        trial = self._trial_class(*self._trial_args, config=self._config,
                                  suppress_output=True, **self._trial_kwargs)
        self._prepare_trial(trial, trial_number)
        trial.run()
        return self._extract_trial_results(trial, trial_number)

    @abstractmethod
    def _prepare_trial(self, trial: Trial, trial_number: int):
        """
        Hook called before each trial starts; the default writes a progress line.
        """
        stdout.write(f"Starting trial {trial_number:03d} of {self._num_trials}...\r")
        stdout.flush()

    @abstractmethod
    def _extract_trial_results(self, trial: Trial, trial_number: int) -> dict:
        """
        Condense a finished trial into a dict. Overrides MUST call this
        method and may add problem-specific entries to the dict it returns.

        Keys:
            trial_number:       1-based number of the trial
            success:            whether the fitness threshold was reached
            number_generations: generation transitions performed
            max_fitness:        fitness of the fittest network of the final generation
            median_fitness:     median fitness of the final generation
            mean_fitness:       mean fitness of the final generation
            topology:           topology of the fittest network
            weight_count:       diagnostic weight count of the fittest network
        """
        fitness = [network.fitness for network in trial._population.networks]
        fittest = trial._population.get_fittest_network()

        return {"trial_number"      : trial_number,
                "success"           : not trial.failed,
                "number_generations": trial._generation_counter,
                "max_fitness"       : max(fitness),
                "median_fitness"    : median(fitness),
                "mean_fitness"      : mean(fitness),
                "topology"          : fittest.topology,
                "weight_count"      : fittest.weight_count}

    @abstractmethod
    def _analyze_trial_results(self, results: dict):
        """
        Record the results of one trial. Overrides MUST call this method,
        typically before displaying the results.
        """
        self.trial_results.append(results)
        if results["success"]:
            self._success_counter += 1

    def summary(self) -> dict:
        """
        Aggregate the recorded trials.

        Generation counts are averaged over the successful trials only, since
        a failed trial always runs to 'max_number_generations'.

        Returns:
            Dict with keys 'trials', 'successes', 'success_rate',
            'mean_generations_to_success' (None without successes),
            'mean_max_fitness', 'best_fitness' and 'best_trial'
            (the last three None when no trial has finished)
        """
        trials    = len(self.trial_results)
        succeeded = [r for r in self.trial_results if r["success"]]

        best = max(self.trial_results, key=lambda r: r["max_fitness"], default=None)

        return {"trials"      : trials,
                "successes"   : len(succeeded),
                "success_rate": len(succeeded) / trials if trials else 0.0,
                "mean_generations_to_success":
                    mean(r["number_generations"] for r in succeeded) if succeeded else None,
                "mean_max_fitness":
                    mean(r["max_fitness"] for r in self.trial_results) if trials else None,
                "best_fitness": best["max_fitness"] if best else None,
                "best_trial"  : best["trial_number"] if best else None}

    @abstractmethod
    def _final_report(self):
        """
        Produce the final report, for example from summary().
        """
        pass
