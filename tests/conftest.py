import json

import numpy as np
import pytest


class FakeInterpreter:
    """Stands in for tf.lite.Interpreter: records fed batches, returns fn(batch)."""

    def __init__(self, dtype=np.int32, output=0.5, fn=None, fail_on_invoke=False, max_seq_len=40):
        self.dtype = dtype
        self.fn = fn or (lambda batch: output)
        self.fail_on_invoke = fail_on_invoke
        self.max_seq_len = max_seq_len
        self.inputs = []
        self.invocations = 0
        self.input_detail_calls = 0
        self.allocated = False
        self.close_calls = 0
        self._out = None

    def allocate_tensors(self):
        self.allocated = True

    def get_input_details(self):
        self.input_detail_calls += 1
        return [{"index": 0, "dtype": self.dtype, "shape": np.array([1, self.max_seq_len])}]

    def get_output_details(self):
        return [{"index": 7, "dtype": np.float32, "shape": np.array([1, 1])}]

    def set_tensor(self, index, value):
        assert index == 0
        self.inputs.append(value)

    def invoke(self):
        self.invocations += 1
        if self.fail_on_invoke:
            raise RuntimeError("tensor shape mismatch")
        self._out = np.array([[self.fn(self.inputs[-1])]], dtype=np.float32)

    def get_tensor(self, index):
        assert index == 7
        return self._out

    def close(self):
        self.close_calls += 1


class RecordingFactory:
    def __init__(self, interpreter):
        self.interpreter = interpreter
        self.paths = []

    def __call__(self, path):
        self.paths.append(path)
        return self.interpreter


@pytest.fixture
def fake_interpreter():
    return FakeInterpreter()


@pytest.fixture
def asset_dir(tmp_path):
    (tmp_path / "tokenizer.json").write_text(
        json.dumps({"word_index": {"otp": 5, "bank": 8}}), encoding="utf-8"
    )
    (tmp_path / "scam_lstm_fp16.tflite").write_bytes(b"TFL3\x00fake-model")
    return tmp_path
