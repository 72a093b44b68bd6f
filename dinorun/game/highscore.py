# dinorun/game/highscore.py
"""Best-score persistence: one integer kept in a small JSON key/value file."""
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from .config import HIGH_SCORE_KEY, SCORES_PATH_DEFAULT, SCORES_PATH_ENV

logger = logging.getLogger(__name__)


def default_scores_path() -> Path:
    return Path(os.environ.get(SCORES_PATH_ENV, SCORES_PATH_DEFAULT)).expanduser()


class JsonKeyValueStore:
    """
    Durable string -> string store backed by a JSON object on disk.
    A missing file reads as an empty store; a malformed one is logged and treated as empty.
    """
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable score file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring score file %s: expected a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str):
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self.path)


class BestScore:
    """The persisted best score. Read once at startup, written only when beaten."""
    def __init__(self, store, key: str = HIGH_SCORE_KEY):
        self.store = store
        self.key = key
        self.value = self._load()

    def _load(self) -> int:
        raw = self.store.get(self.key)
        if raw is None:
            return 0
        try:
            return int(float(raw))
        except (ValueError, OverflowError):
            logger.warning("Ignoring non-numeric best score %r", raw)
            return 0

    def submit(self, score: float) -> bool:
        """Record floor(score) if it beats the stored value. Returns True on a new best."""
        final = int(score)
        if final <= self.value:
            return False
        self.value = final
        try:
            self.store.set(self.key, str(final))
        except OSError as e:
            logger.warning("Could not save best score %d: %s", final, e)
        logger.info("New best score: %d", final)
        return True


class MemoryStore:
    """Non-durable store for headless runs (Gym env, tests)."""
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str):
        self.data[key] = value
