"""Text → fixed-length index sequence, matching texts_to_sequences + pad_sequences
as configured at training time (num_words cap, <OOV> index, post padding,
tail truncation)."""

from typing import Iterable, List, Mapping, Sequence, Tuple

from .config import ClassifierConfig
from .normalize import tokenize

EncodedSequence = Tuple[int, ...]


def pad_sequence(indices: Sequence[int], max_seq_len: int, padding: str = "post") -> EncodedSequence:
    """Keep the first max_seq_len indices, then zero-pad on the given side."""
    kept = list(indices[:max_seq_len])
    pad = [0] * (max_seq_len - len(kept))
    if padding == "post":
        return tuple(kept + pad)
    return tuple(pad + kept)


def to_indices(tokens: Iterable[str], vocabulary: Mapping[str, int], config: ClassifierConfig) -> List[int]:
    out = []
    for tok in tokens:
        idx = vocabulary.get(tok, config.oov_index)
        # num_words: only indices below the cap are known words
        if idx >= config.vocab_size or idx < 0:
            idx = config.oov_index
        out.append(idx)
    return out


def encode(text: str, vocabulary: Mapping[str, int], config: ClassifierConfig) -> EncodedSequence:
    tokens = tokenize(text)
    if not tokens:
        return (0,) * config.max_seq_len
    return pad_sequence(to_indices(tokens, vocabulary, config), config.max_seq_len, config.padding)


def encode_batch(texts: Iterable[str], vocabulary: Mapping[str, int], config: ClassifierConfig) -> List[EncodedSequence]:
    return [encode(t, vocabulary, config) for t in texts]
