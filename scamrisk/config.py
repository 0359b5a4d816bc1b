from dataclasses import dataclass
import logging
import os
from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()

PADDING_SIDES = ("post", "pre")

DEFAULT_MODEL_FILE = "scam_lstm_fp16.tflite"
DEFAULT_VOCAB_FILE = "tokenizer.json"


@dataclass(frozen=True)
class ClassifierConfig:
    """Preprocessing contract shared with the training pipeline.

    max_seq_len, vocab_size and oov_index must equal the MAX_LEN, num_words
    and <OOV> index used when the model was trained.
    """
    max_seq_len: int = 40
    oov_index: int = 1
    vocab_size: int = 12000
    padding: str = "post"
    model_file: str = DEFAULT_MODEL_FILE
    vocab_file: str = DEFAULT_VOCAB_FILE

    def __post_init__(self):
        if self.max_seq_len < 1:
            raise ConfigError(f"max_seq_len must be >= 1, got {self.max_seq_len}")
        if self.vocab_size < 1:
            raise ConfigError(f"vocab_size must be >= 1, got {self.vocab_size}")
        if self.oov_index < 0:
            raise ConfigError(f"oov_index must be >= 0, got {self.oov_index}")
        if self.padding not in PADDING_SIDES:
            raise ConfigError(f"padding must be one of {PADDING_SIDES}, got {self.padding!r}")

    @property
    def padding_post(self) -> bool:
        return self.padding == "post"


@dataclass(frozen=True)
class Settings:
    asset_dir: str | None
    log_level: str
    classifier: ClassifierConfig


def _to_int(x, default: int, minimum: int = 0) -> int:
    try: v = int(x) if x else default
    except ValueError: return default
    return v if v >= minimum else default


def load_settings() -> Settings:
    padding = (os.getenv("SCAMRISK_PADDING") or "post").strip().lower()
    if padding not in PADDING_SIDES:
        padding = "post"
    return Settings(
        asset_dir=os.getenv("SCAMRISK_ASSET_DIR") or None,
        log_level=os.getenv("SCAMRISK_LOG_LEVEL", "WARNING"),
        classifier=ClassifierConfig(
            max_seq_len=_to_int(os.getenv("SCAMRISK_MAX_SEQ_LEN"), 40, minimum=1),
            oov_index=_to_int(os.getenv("SCAMRISK_OOV_INDEX"), 1),
            vocab_size=_to_int(os.getenv("SCAMRISK_VOCAB_SIZE"), 12000, minimum=1),
            padding=padding,
            model_file=os.getenv("SCAMRISK_MODEL_FILE", DEFAULT_MODEL_FILE),
            vocab_file=os.getenv("SCAMRISK_VOCAB_FILE", DEFAULT_VOCAB_FILE),
        ),
    )


def configure_logging(level=None):
    """Attach a basic stderr handler; applications with their own logging setup skip this."""
    level = level or load_settings().log_level
    if isinstance(level, str):
        level = level.strip().upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


SETTINGS = load_settings()
