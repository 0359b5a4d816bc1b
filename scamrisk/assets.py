"""Bundled artifact lookup.

Artifacts (tokenizer.json, the .tflite model) ship next to the application
rather than inside the package; the store searches an ordered list of
directories and returns the first match.
"""

import os
from typing import Iterable, List, Optional

from .errors import AssetNotFoundError

PACKAGE_MODELS_DIR = os.path.join(os.path.dirname(__file__), "..", "models")


def default_search_dirs(asset_dir: Optional[str] = None) -> List[str]:
    dirs = []
    if asset_dir:
        dirs.append(asset_dir)
    env_dir = os.getenv("SCAMRISK_ASSET_DIR")
    if env_dir and env_dir not in dirs:
        dirs.append(env_dir)
    dirs.append("models")
    dirs.append(PACKAGE_MODELS_DIR)
    return dirs


class AssetStore:
    def __init__(self, search_dirs: Optional[Iterable[str]] = None):
        self.search_dirs: List[str] = [os.fspath(d) for d in (search_dirs or default_search_dirs())]

    @classmethod
    def from_dir(cls, asset_dir) -> "AssetStore":
        return cls([os.fspath(asset_dir)])

    def path(self, name: str) -> str:
        for d in self.search_dirs:
            p = os.path.join(d, name)
            if os.path.isfile(p):
                return p
        raise AssetNotFoundError(f"{name} not found in {self.search_dirs}")

    def open_text(self, name: str):
        return open(self.path(name), "r", encoding="utf-8")

    def __repr__(self):
        return f"AssetStore({self.search_dirs!r})"
