import logging
import os
from pathlib import Path
from typing import Dict, Optional

# Project root (this file lives in core/system_config.py)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "output/generated_documents"
DEFAULT_RUN_LOG_DIR = "run_log"


def read_env_file(env_path: Path) -> Dict[str, str]:
    """Parses KEY=VALUE lines; blank lines and # comments are skipped, quotes stripped."""
    values = {}
    with open(env_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key:
                values[key] = value.strip().strip("'").strip('"')
    return values


class SystemConfig:
    """
    Runtime settings for the editor, read from the environment.

    A ``.env`` file at the project root is merged in once; variables already
    set in the process environment win over it.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(SystemConfig, cls).__new__(cls)
            cls._instance._merge_env_file(PROJECT_ROOT / ".env")
        return cls._instance

    def _merge_env_file(self, env_path: Path):
        if not env_path.exists():
            return
        try:
            values = read_env_file(env_path)
        except OSError as e:
            logger.warning(f"Failed to read {env_path}: {e}")
            return
        for key, value in values.items():
            os.environ.setdefault(key, value)
        logger.info(f"Loaded {len(values)} settings from {env_path}")

    @property
    def output_dir(self) -> Path:
        return self._resolve_path("OUTPUT_DIR", DEFAULT_OUTPUT_DIR)

    @property
    def run_log_dir(self) -> Path:
        return self._resolve_path("RUN_LOG_DIR", DEFAULT_RUN_LOG_DIR)

    @property
    def default_document_type(self) -> str:
        return os.getenv("DEFAULT_DOCUMENT_TYPE") or "invoice"

    @property
    def log_level(self) -> int:
        name = (os.getenv("LOG_LEVEL") or "INFO").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            logger.warning(f"Unknown LOG_LEVEL '{name}', falling back to INFO")
            return logging.INFO
        return level

    @staticmethod
    def _resolve_path(env_key: str, default_relative: str, root: Optional[Path] = None) -> Path:
        # Relative values (from env or default) are anchored at the project root
        root = root or PROJECT_ROOT
        path_obj = Path(os.getenv(env_key) or default_relative)
        if not path_obj.is_absolute():
            path_obj = root / path_obj
        return path_obj.resolve()


# Singleton instance
sys_config = SystemConfig()
