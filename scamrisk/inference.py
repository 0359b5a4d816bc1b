"""
Runs the exported TFLite sequence model on one encoded sequence.

The interpreter is created once, at construction. The input tensor's dtype is
resolved to an InputKind at the same time, so each call only builds the
batch and invokes. Every load or run failure becomes a result with score 0
and a status describing what went wrong; nothing is raised to the caller.
"""

import enum
import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)


class InputKind(enum.Enum):
    INT = "int"
    FLOAT = "float"
    UNSUPPORTED = "unsupported"


class InferenceStatus(str, enum.Enum):
    OK = "ok"
    UNSUPPORTED_INPUT = "unsupported_input"
    LOAD_FAILED = "load_failed"
    RUN_FAILED = "run_failed"
    CLOSED = "closed"


@dataclass(frozen=True)
class InferenceResult:
    score: float
    status: InferenceStatus
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is InferenceStatus.OK


def tflite_interpreter(model_path: str):
    """Default factory. TFLite memory-maps model_path read-only."""
    import tensorflow as tf
    return tf.lite.Interpreter(model_path=model_path)


def resolve_input_kind(dtype: Any) -> InputKind:
    try:
        dt = np.dtype(dtype)
    except TypeError:
        return InputKind.UNSUPPORTED
    if np.issubdtype(dt, np.integer):
        return InputKind.INT
    if np.issubdtype(dt, np.floating):
        return InputKind.FLOAT
    return InputKind.UNSUPPORTED


def clamp_score(x: float) -> float:
    return min(1.0, max(0.0, x))


def _describe(e: Exception) -> str:
    return f"{type(e).__name__}: {e}"


class ModelRunner:
    def __init__(self, model_path, interpreter_factory: Callable[[str], Any] = tflite_interpreter):
        self.model_path = os.fspath(model_path)
        self.input_kind = InputKind.UNSUPPORTED
        self.load_error: Optional[str] = None
        self._interpreter = None
        self._input_index = None
        self._input_dtype = None
        self._output_index = None
        self._closed = False

        try:
            interpreter = interpreter_factory(self.model_path)
            interpreter.allocate_tensors()
            inp = interpreter.get_input_details()[0]
            out = interpreter.get_output_details()[0]
        except Exception as e:
            logger.exception("Model load failed: %s", self.model_path)
            self.load_error = _describe(e)
            return

        self._interpreter = interpreter
        self._input_index = inp["index"]
        self._input_dtype = inp["dtype"]
        self._output_index = out["index"]
        self.input_kind = resolve_input_kind(inp["dtype"])
        if self.input_kind is InputKind.UNSUPPORTED:
            logger.info("Model input dtype %s is unsupported; predictions will score 0", inp["dtype"])
        else:
            logger.info("Loaded %s (input %s %s, shape %s)", self.model_path,
                        self.input_kind.value, np.dtype(inp["dtype"]).name, list(inp.get("shape", [])))

    @classmethod
    def unavailable(cls, model_path, error: str) -> "ModelRunner":
        """A runner whose model could not be located; every infer() reports LOAD_FAILED."""
        def _missing(_path):
            raise FileNotFoundError(error)
        return cls(model_path, interpreter_factory=_missing)

    @property
    def loaded(self) -> bool:
        return self._interpreter is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def infer(self, sequence: Sequence[int]) -> InferenceResult:
        if self._closed:
            return InferenceResult(0.0, InferenceStatus.CLOSED, "model runner is closed")
        if self._interpreter is None:
            return InferenceResult(0.0, InferenceStatus.LOAD_FAILED, self.load_error)
        if self.input_kind is InputKind.UNSUPPORTED:
            return InferenceResult(0.0, InferenceStatus.UNSUPPORTED_INPUT,
                                   f"unsupported input dtype {self._input_dtype}")

        try:
            # single-row batch: [1, max_seq_len], cast to the declared dtype
            batch = np.asarray([list(sequence)], dtype=self._input_dtype)
            self._interpreter.set_tensor(self._input_index, batch)
            self._interpreter.invoke()
            raw = self._interpreter.get_tensor(self._output_index)
            value = float(np.ravel(raw)[0])
        except Exception as e:
            logger.exception("Model run failed")
            return InferenceResult(0.0, InferenceStatus.RUN_FAILED, _describe(e))

        if math.isnan(value):
            logger.error("Model produced NaN; scoring 0")
            return InferenceResult(0.0, InferenceStatus.RUN_FAILED, "model produced NaN")
        return InferenceResult(clamp_score(value), InferenceStatus.OK)

    def close(self):
        if self._closed:
            return
        self._closed = True
        interpreter, self._interpreter = self._interpreter, None
        # tf.lite.Interpreter has no close(); dropping the last reference unmaps the model
        closer = getattr(interpreter, "close", None)
        if closer is not None:
            try:
                closer()
            except Exception:
                logger.warning("Error while closing interpreter", exc_info=True)
