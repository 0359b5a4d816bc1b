"""
Public entry point: RiskClassifier.predict(text) -> score in [0, 1].

what?:
  - loads tokenizer.json and the .tflite model once, at construction.
  - per call: normalize → encode to max_seq_len indices → run model → clamp.

failure?:
  - a broken vocabulary degrades to all-OOV; a broken model scores 0.
    predict() never raises for either; predict_detailed() carries the status
    so callers can tell a real low score from a failed inference.
  - predict() after close() raises ClassifierClosedError.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple

from .assets import AssetStore, default_search_dirs
from .config import DEFAULT_MODEL_FILE, DEFAULT_VOCAB_FILE, SETTINGS, ClassifierConfig, Settings
from .encoder import EncodedSequence, encode
from .errors import AssetNotFoundError, ClassifierClosedError
from .inference import InferenceStatus, InputKind, ModelRunner, tflite_interpreter
from .policy import RiskLevel, risk_level
from .vocabulary import EMPTY_VOCABULARY, STRATEGY_NONE, VocabularyLoad, load_vocabulary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prediction:
    score: float
    status: InferenceStatus
    sequence: EncodedSequence
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is InferenceStatus.OK


def _as_store(assets) -> AssetStore:
    if assets is None:
        return AssetStore()
    if isinstance(assets, AssetStore):
        return assets
    return AssetStore.from_dir(os.fspath(assets))


class RiskClassifier:
    def __init__(
        self,
        assets=None,
        model_file: str = DEFAULT_MODEL_FILE,
        vocab_file: str = DEFAULT_VOCAB_FILE,
        max_seq_len: int = 40,
        padding_post: bool = True,
        oov_index: int = 1,
        vocab_size: int = 12000,
        interpreter_factory=tflite_interpreter,
    ):
        self.config = ClassifierConfig(
            max_seq_len=max_seq_len,
            oov_index=oov_index,
            vocab_size=vocab_size,
            padding="post" if padding_post else "pre",
            model_file=model_file,
            vocab_file=vocab_file,
        )
        self.assets = _as_store(assets)
        self._closed = False
        self._vocab_load = self._load_vocabulary()
        self._runner = self._load_model(interpreter_factory)

    @classmethod
    def from_config(cls, config: ClassifierConfig, assets=None, interpreter_factory=tflite_interpreter) -> "RiskClassifier":
        return cls(
            assets=assets,
            model_file=config.model_file,
            vocab_file=config.vocab_file,
            max_seq_len=config.max_seq_len,
            padding_post=config.padding_post,
            oov_index=config.oov_index,
            vocab_size=config.vocab_size,
            interpreter_factory=interpreter_factory,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, interpreter_factory=tflite_interpreter) -> "RiskClassifier":
        settings = settings or SETTINGS
        return cls.from_config(settings.classifier, AssetStore(default_search_dirs(settings.asset_dir)),
                               interpreter_factory=interpreter_factory)

    # ----- loading -----
    def _load_vocabulary(self) -> VocabularyLoad:
        try:
            path = self.assets.path(self.config.vocab_file)
        except AssetNotFoundError as e:
            logger.warning("Vocabulary unavailable (%s); every token will encode as OOV", e)
            return VocabularyLoad(EMPTY_VOCABULARY, STRATEGY_NONE, str(e))
        return load_vocabulary(path)

    def _load_model(self, interpreter_factory) -> ModelRunner:
        try:
            path = self.assets.path(self.config.model_file)
        except AssetNotFoundError as e:
            return ModelRunner.unavailable(self.config.model_file, str(e))
        return ModelRunner(path, interpreter_factory=interpreter_factory)

    # ----- state -----
    @property
    def vocabulary(self) -> Mapping[str, int]:
        return self._vocab_load.vocabulary

    @property
    def vocabulary_load(self) -> VocabularyLoad:
        return self._vocab_load

    @property
    def input_kind(self) -> InputKind:
        return self._runner.input_kind

    @property
    def model_loaded(self) -> bool:
        return self._runner.loaded

    @property
    def closed(self) -> bool:
        return self._closed

    # ----- scoring -----
    def encode(self, text: str) -> EncodedSequence:
        return encode(text, self.vocabulary, self.config)

    def predict_detailed(self, text: str) -> Prediction:
        if self._closed:
            raise ClassifierClosedError("RiskClassifier is closed")
        seq = self.encode(text)
        result = self._runner.infer(seq)
        return Prediction(result.score, result.status, seq, result.error)

    def predict(self, text: str) -> float:
        return self.predict_detailed(text).score

    def predict_proba(self, texts: Iterable[str]) -> List[float]:
        return [self.predict(t) for t in texts]

    def assess(self, text: str, thresholds=None) -> Tuple[float, RiskLevel]:
        score = self.predict(text)
        return score, risk_level(score, thresholds)

    # ----- lifecycle -----
    def close(self):
        if self._closed:
            return
        self._closed = True
        self._runner.close()
        self._vocab_load = VocabularyLoad(EMPTY_VOCABULARY, STRATEGY_NONE, "classifier closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
