from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

METRICS_BACKENDS = ("noop", "prometheus")


@dataclass
class Settings:
    """
    Centralized configuration for trackers built through the factory.

    Values are loaded from environment variables via Settings.from_env().
    """

    # --- Metrics backend: "noop" or "prometheus" ---
    metrics_backend: str = "noop"

    # --- Name used when a tracker is built without one ---
    default_name: str = "default"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build Settings from environment variables with sane fallbacks.

        - Empty values fall back to the defaults.
        - The backend name is case-insensitive.
        """

        def getenv_str(name: str, default: str) -> str:
            raw = os.getenv(name)
            if raw is None or raw.strip() == "":
                return default
            return raw.strip()

        return cls(
            metrics_backend=getenv_str(
                "ASYNC_STATUS_METRICS", cls.metrics_backend
            ).lower(),
            default_name=getenv_str("ASYNC_STATUS_DEFAULT_NAME", cls.default_name),
        )


@lru_cache()
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
