"""
Vocabulary loading for the exported Keras tokenizer.

WHAT:
  - reads tokenizer.json (tokenizer.to_json() output, or a bare word_index
    dump) into an immutable word -> index mapping.
  - tries word_index, then index_word (inverted), then top-level int fields;
    the first field present decides, later strategies are not consulted.

FAILURE:
  - a missing or malformed artifact yields an empty vocabulary plus an error
    message on the result. Every token then encodes as OOV.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

STRATEGY_WORD_INDEX = "word_index"
STRATEGY_INDEX_WORD = "index_word"
STRATEGY_TOP_LEVEL = "top_level"
STRATEGY_NONE = "none"

INT_RE = re.compile(r"[+-]?[0-9]+")

EMPTY_VOCABULARY: Mapping[str, int] = MappingProxyType({})


@dataclass(frozen=True)
class VocabularyLoad:
    vocabulary: Mapping[str, int]
    strategy: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __len__(self):
        return len(self.vocabulary)


def parse_int(value: Any) -> Optional[int]:
    """Native ints, integral floats and ASCII-digit strings; None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        s = value.strip()
        return int(s) if INT_RE.fullmatch(s) else None
    return None


def _as_object(value: Any) -> Optional[Dict[str, Any]]:
    # Keras stores word_index/index_word inside "config" as JSON-encoded strings
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except (ValueError, RecursionError):
            return None
    return value if isinstance(value, dict) else None


def _from_word_index(wi: Dict[str, Any]) -> Dict[str, int]:
    out: Dict[str, int] = {}
    for word, raw in wi.items():
        idx = parse_int(raw)
        if idx is not None:
            out[word] = idx
    return out


def _from_index_word(iw: Dict[str, Any]) -> Dict[str, int]:
    out: Dict[str, int] = {}
    for key, word in iw.items():
        idx = parse_int(key)
        if idx is not None and isinstance(word, str):
            out[word] = idx
    return out


def _from_top_level(data: Dict[str, Any]) -> Dict[str, int]:
    return {k: idx for k, idx in ((k, parse_int(v)) for k, v in data.items()) if idx is not None}


def _unwrap(data: Dict[str, Any]) -> Dict[str, Any]:
    if STRATEGY_WORD_INDEX in data or STRATEGY_INDEX_WORD in data:
        return data
    config = _as_object(data.get("config"))
    if config is not None and (STRATEGY_WORD_INDEX in config or STRATEGY_INDEX_WORD in config):
        return config
    return data


def parse_vocabulary(data: Any) -> VocabularyLoad:
    """Apply the word_index → index_word → top-level order to parsed JSON."""
    if not isinstance(data, dict):
        return VocabularyLoad(EMPTY_VOCABULARY, STRATEGY_NONE,
                              f"expected a JSON object, got {type(data).__name__}")
    data = _unwrap(data)

    if STRATEGY_WORD_INDEX in data:
        wi = _as_object(data[STRATEGY_WORD_INDEX])
        if wi is None:
            return VocabularyLoad(EMPTY_VOCABULARY, STRATEGY_NONE, "word_index is not an object")
        return VocabularyLoad(MappingProxyType(_from_word_index(wi)), STRATEGY_WORD_INDEX)

    if STRATEGY_INDEX_WORD in data:
        iw = _as_object(data[STRATEGY_INDEX_WORD])
        if iw is None:
            return VocabularyLoad(EMPTY_VOCABULARY, STRATEGY_NONE, "index_word is not an object")
        return VocabularyLoad(MappingProxyType(_from_index_word(iw)), STRATEGY_INDEX_WORD)

    fallback = _from_top_level(data)
    if fallback:
        return VocabularyLoad(MappingProxyType(fallback), STRATEGY_TOP_LEVEL)
    return VocabularyLoad(EMPTY_VOCABULARY, STRATEGY_NONE)


def load_vocabulary(source) -> VocabularyLoad:
    """
    Load a vocabulary from a path, an open text file, or an already-parsed dict.
    Never raises for unreadable or malformed input.
    """
    try:
        if isinstance(source, dict):
            data = source
        elif hasattr(source, "read"):
            data = json.load(source)
        else:
            with open(os.fspath(source), "r", encoding="utf-8") as f:
                data = json.load(f)
    except (OSError, ValueError, TypeError, RecursionError) as e:
        logger.warning("Vocabulary load failed (%s); every token will encode as OOV", e)
        return VocabularyLoad(EMPTY_VOCABULARY, STRATEGY_NONE, str(e))

    result = parse_vocabulary(data)
    if result.error:
        logger.warning("Vocabulary artifact malformed (%s); every token will encode as OOV", result.error)
    elif not result.vocabulary:
        logger.warning("Vocabulary artifact yielded no entries; every token will encode as OOV")
    else:
        logger.info("Loaded %d vocabulary entries via %s", len(result.vocabulary), result.strategy)
    return result
