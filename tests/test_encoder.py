import pytest

from scamrisk.config import ClassifierConfig
from scamrisk.encoder import encode, encode_batch, pad_sequence

VOCAB = {"otp": 5, "bank": 8}


def test_end_to_end_scenario_sequence():
    cfg = ClassifierConfig(max_seq_len=6)
    assert encode("URGENT: verify your OTP now!", VOCAB, cfg) == (1, 1, 1, 5, 1, 0)


@pytest.mark.parametrize("n_tokens", [0, 1, 40, 400])
def test_length_is_always_max_seq_len(n_tokens):
    cfg = ClassifierConfig()
    text = " ".join(["otp"] * n_tokens)
    assert len(encode(text, VOCAB, cfg)) == cfg.max_seq_len


def test_filter_only_text_is_all_padding():
    cfg = ClassifierConfig(max_seq_len=8)
    assert encode("!!!...###", VOCAB, cfg) == (0,) * 8


def test_unknown_token_maps_to_oov():
    cfg = ClassifierConfig(max_seq_len=3, oov_index=1)
    assert encode("lottery", VOCAB, cfg) == (1, 0, 0)


def test_custom_oov_index():
    cfg = ClassifierConfig(max_seq_len=3, oov_index=2)
    assert encode("lottery otp", VOCAB, cfg) == (2, 5, 0)


def test_vocabulary_cap_replaces_known_words():
    cfg = ClassifierConfig(max_seq_len=3, vocab_size=12000)
    vocab = {"rare": 12000, "edge": 11999, "huge": 50000}
    assert encode("rare edge huge", vocab, cfg) == (1, 11999, 1)


def test_negative_index_maps_to_oov():
    cfg = ClassifierConfig(max_seq_len=2)
    assert encode("weird", {"weird": -3}, cfg) == (1, 0)


def test_truncation_keeps_leading_tokens():
    cfg = ClassifierConfig(max_seq_len=6)
    vocab = {f"w{i}": i + 2 for i in range(11)}
    text = " ".join(f"w{i}" for i in range(11))
    assert encode(text, vocab, cfg) == (2, 3, 4, 5, 6, 7)


def test_pre_padding_right_aligns():
    cfg = ClassifierConfig(max_seq_len=6, padding="pre")
    assert encode("otp bank", VOCAB, cfg) == (0, 0, 0, 0, 5, 8)


def test_pre_padding_still_truncates_tail():
    cfg = ClassifierConfig(max_seq_len=2, padding="pre")
    assert encode("otp bank otp", VOCAB, cfg) == (5, 8)


def test_empty_vocabulary_encodes_everything_as_oov():
    cfg = ClassifierConfig(max_seq_len=4)
    assert encode("otp bank", {}, cfg) == (1, 1, 0, 0)


def test_pad_sequence():
    assert pad_sequence([3, 4], 4) == (3, 4, 0, 0)
    assert pad_sequence([3, 4], 4, "pre") == (0, 0, 3, 4)
    assert pad_sequence([1, 2, 3, 4, 5], 3) == (1, 2, 3)
    assert pad_sequence([], 2) == (0, 0)


def test_encode_batch():
    cfg = ClassifierConfig(max_seq_len=2)
    assert encode_batch(["otp", "", "bank otp"], VOCAB, cfg) == [(5, 0), (0, 0), (8, 5)]


def test_nbsp_joined_words_encode_as_one_oov_token():
    cfg = ClassifierConfig(max_seq_len=4)
    assert encode("otp\x1cbank", VOCAB, cfg) == (1, 0, 0, 0)
    assert encode("otp\xa0bank otp", VOCAB, cfg) == (1, 5, 0, 0)
