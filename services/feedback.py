"""
feedback.py — Per-Topic Like / Dislike Store
=============================================
A tiny key-value store: topic name → "like" | "dislike".

    store = FeedbackStore("feedback.json")    # or FeedbackStore() for memory only
    store.save("Dijkstra's Algorithm", "like")
    store.load("Dijkstra's Algorithm")        # "like"

With a path, the whole table is one JSON object rewritten on every save.
An unreadable file is logged and treated as empty, the same way a broken
browser storage entry would be.
"""

import json
import logging
import os
import threading
from typing import Dict, Optional


logger = logging.getLogger(__name__)

FEEDBACK_VALUES = ("like", "dislike")


class FeedbackStore:
    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._lock = threading.Lock()
        self._memory: Dict[str, str] = {}

    def save(self, key: str, value: str) -> None:
        if value not in FEEDBACK_VALUES:
            raise ValueError(f"Feedback must be one of {FEEDBACK_VALUES}, got {value!r}")
        with self._lock:
            table = self._read()
            table[key] = value
            self._write(table)

    def load(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def all(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._read())

    # ------------------------------------------------------------------
    # Backend
    # ------------------------------------------------------------------
    def _read(self) -> Dict[str, str]:
        if self.path is None:
            return self._memory
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to read feedback from %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed feedback file %s", self.path)
            return {}
        return data

    def _write(self, table: Dict[str, str]) -> None:
        if self.path is None:
            self._memory = table
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(table, f, indent=2, sort_keys=True)
