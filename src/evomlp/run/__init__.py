from evomlp.run.config     import Config
from evomlp.run.trial      import Trial
from evomlp.run.trial_grad import TrialGrad, train_epochs
from evomlp.run.experiment import Experiment

__all__ = ["Config", "Trial", "TrialGrad", "Experiment", "train_epochs"]
