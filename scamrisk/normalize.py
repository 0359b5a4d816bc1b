"""
Normalization & tokenization helpers.

WHAT:
  - lowercasing, Keras-filter punctuation removal, whitespace collapse,
    token list helper used by the encoder.

WHY:
  - Must reproduce Tokenizer(filters=..., lower=True) from training exactly;
    a different filter set changes which tokens hit the vocabulary.
"""

import re
from typing import List

# keras.preprocessing.text.Tokenizer default filters
KERAS_FILTERS = '!"#$%&()*+,-./:;<=>?@[\\]^_`{|}~\t\n'

FILTER_RE = re.compile("[" + re.escape(KERAS_FILTERS) + "]")
# ASCII whitespace only; NBSP and other Unicode spaces stay inside tokens
WS_RE = re.compile(r"\s+", re.ASCII)


def normalize_text(text: str) -> str:
    t = (text or "").lower()
    t = FILTER_RE.sub(" ", t)
    t = WS_RE.sub(" ", t).strip(" ")
    return t


def tokenize(text: str) -> List[str]:
    return [tok for tok in normalize_text(text).split(" ") if tok]
