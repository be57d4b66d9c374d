"""
Run Package

This package implements trial and experiment execution.

A trial represents a complete evolutionary run, managing the population through
generations until a solution is found or maximum generations are reached.

An experiment represents a collection of multiple trials for gathering statistical data.

Modules:
    config:      Configuration management for the genetic algorithm
    trial:       Abstract base class for trials
    experiment:  Abstract base class for experiments

Exported Classes:
    Config:      Configuration parameters for the genetic algorithm
    Trial:       Abstract base class for trials
    Experiment:  Abstract base class for experiments (multi-trial runs, joblib parallelization)
"""

from evonet.run.config     import Config
from evonet.run.trial      import Trial
from evonet.run.experiment import Experiment

__all__ = ['Config','Trial','Experiment']
