# minirunner/game/scores.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Union
from .config import HIGH_SCORE_KEY, SCORES_FILE_DEFAULT

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Best score kept in one named slot of a small JSON file."""

    def __init__(self, path: Union[str, Path] = SCORES_FILE_DEFAULT, key: str = HIGH_SCORE_KEY):
        self.path = Path(path).expanduser()
        self.key = key

    def _read(self) -> dict:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except ValueError as e:
            logger.warning("ignoring unreadable score file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("ignoring score file %s: expected an object", self.path)
            return {}
        return data

    def _read_safe(self) -> dict:
        try:
            return self._read()
        except OSError as e:
            logger.warning("ignoring unreadable score file %s: %s", self.path, e)
            return {}

    def _valid(self, value) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("invalid best score %r in %s, using 0", value, self.path)
            return 0
        return value

    def load(self) -> int:
        """Stored best score, 0 when absent or invalid."""
        return self._valid(self._read_safe().get(self.key, 0))

    def save(self, best: int):
        """Write max(stored, best). Failures are logged, never raised."""
        try:
            data = self._read()
            data[self.key] = max(self._valid(data.get(self.key, 0)), int(best))
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("could not write score file %s: %s", self.path, e)
