"""
config.py — Application Configuration
======================================
Class attributes are the defaults; `Config.from_env()` returns a copy with
any GRAPH_ANIMATOR_* environment variables applied.  Flask loads the
result with `app.config.from_object(...)`, so only UPPERCASE names count.

    GRAPH_ANIMATOR_SECRET_KEY            session signing key
    GRAPH_ANIMATOR_LOG_LEVEL             DEBUG / INFO / WARNING …
    GRAPH_ANIMATOR_DEFAULT_SPEED_MS      playback interval for new sessions
    GRAPH_ANIMATOR_EXPLANATION_URL       generateContent API root
    GRAPH_ANIMATOR_EXPLANATION_MODEL     model name
    GRAPH_ANIMATOR_EXPLANATION_API_KEY   credential (falls back to API_KEY)
    GRAPH_ANIMATOR_EXPLANATION_TIMEOUT   seconds
    GRAPH_ANIMATOR_FEEDBACK_PATH         JSON file; empty keeps feedback in memory
    GRAPH_ANIMATOR_MAX_SESSIONS          live playback sessions kept before the oldest is dropped
"""

import os
import secrets
from typing import Mapping, Optional

from engine.playback import DEFAULT_SPEED_MS
from services.explanation import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT


ENV_PREFIX = "GRAPH_ANIMATOR_"


class Config:
    SECRET_KEY:            str           = secrets.token_hex(32)
    LOG_LEVEL:             str           = "INFO"
    DEFAULT_SPEED_MS:      int           = DEFAULT_SPEED_MS
    EXPLANATION_URL:       str           = DEFAULT_BASE_URL
    EXPLANATION_MODEL:     str           = DEFAULT_MODEL
    EXPLANATION_API_KEY:   Optional[str] = None
    EXPLANATION_TIMEOUT:   float         = DEFAULT_TIMEOUT
    FEEDBACK_PATH:         Optional[str] = None
    MAX_SESSIONS:          int           = 256
    TESTING:               bool          = False

    # settings read from the environment, and how to parse them
    _env_casts = {
        "SECRET_KEY":          str,
        "LOG_LEVEL":           str,
        "DEFAULT_SPEED_MS":    int,
        "EXPLANATION_URL":     str,
        "EXPLANATION_MODEL":   str,
        "EXPLANATION_API_KEY": str,
        "EXPLANATION_TIMEOUT": float,
        "FEEDBACK_PATH":       str,
        "MAX_SESSIONS":        int,
    }

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        environ = os.environ if environ is None else environ
        config = cls()
        for name, cast in cls._env_casts.items():
            raw = environ.get(ENV_PREFIX + name)
            if raw is None or raw == "":
                continue
            try:
                setattr(config, name, cast(raw))
            except ValueError:
                raise ValueError(f"Invalid value for {ENV_PREFIX + name}: {raw!r}") from None

        if config.EXPLANATION_API_KEY is None and environ.get("API_KEY"):
            config.EXPLANATION_API_KEY = environ["API_KEY"]
        config.LOG_LEVEL = config.LOG_LEVEL.upper()
        return config
