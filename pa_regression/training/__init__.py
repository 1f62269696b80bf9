# pa_regression/training/__init__.py
from .context import TrainingSession, TrainingState
from .step import StepOutcome, StepStatus, TrainingStep
from .pipeline import TrainingPipeline

__all__ = [
    "TrainingSession", "TrainingState",
    "TrainingStep", "StepOutcome", "StepStatus",
    "TrainingPipeline",
]
