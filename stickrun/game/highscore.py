# stickrun/game/highscore.py
from __future__ import annotations
import json
from pathlib import Path

DEFAULT_PATH = Path.home() / ".stickrun" / "highscore.json"


class HighScoreStore:
    """Best score as a tiny JSON file. Missing or unreadable file -> 0."""

    def __init__(self, path: Path | str = DEFAULT_PATH):
        self.path = Path(path)

    def load(self) -> int:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return max(0, int(data.get("high_score", 0)))
        except (FileNotFoundError, json.JSONDecodeError, AttributeError, TypeError, ValueError):
            return 0

    def save(self, score: int):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"high_score": int(score)}), encoding="utf-8")
