"""Scam-risk scoring for free-form text with a Keras tokenizer + TFLite model."""

from .classifier import Prediction, RiskClassifier
from .config import ClassifierConfig, Settings, configure_logging, load_settings
from .errors import AssetNotFoundError, ClassifierClosedError, ConfigError, ScamRiskError
from .inference import InferenceStatus, InputKind
from .policy import RiskLevel

__all__ = [
    "RiskClassifier",
    "Prediction",
    "ClassifierConfig",
    "Settings",
    "load_settings",
    "configure_logging",
    "InferenceStatus",
    "InputKind",
    "RiskLevel",
    "ScamRiskError",
    "ConfigError",
    "AssetNotFoundError",
    "ClassifierClosedError",
]
