"""
Configuration management for the fixture tools.
"""

import os
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


@dataclass
class ToolConfig:
    """Paths and switches shared by fill/consume/fixtures_to_vectors."""
    fixtures_dir: Path = ROOT / "fixtures"
    vectors_dir: Path = ROOT / "vectors"

    verbose: bool = False
    stop_on_first_failure: bool = False

    @classmethod
    def from_env(cls) -> "ToolConfig":
        """Load configuration from environment variables."""
        config = cls()

        if os.environ.get("FIXTURES_DIR"):
            config.fixtures_dir = Path(os.environ["FIXTURES_DIR"]).expanduser().resolve()
        if os.environ.get("VECTORS_DIR"):
            config.vectors_dir = Path(os.environ["VECTORS_DIR"]).expanduser().resolve()

        config.verbose = _env_flag("VERBOSE")
        config.stop_on_first_failure = _env_flag("STOP_ON_FIRST_FAILURE")

        return config
