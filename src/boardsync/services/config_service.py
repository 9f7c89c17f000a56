"""Configuration service for loading boardsync.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import BoardsyncConfig, EngineConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching application configuration."""

    CONFIG_FILE = "boardsync.yml"

    def __init__(self, project_root: Path) -> None:
        """Initialize the config service.

        Args:
            project_root: Directory containing boardsync.yml
        """
        self.project_root = project_root
        self._config: BoardsyncConfig | None = None
        self._config_error: str | None = None

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    @property
    def board_root(self) -> Path:
        """Absolute directory holding boards."""
        return self.project_root / self.get_config().board_root

    def get_config(self) -> BoardsyncConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_engine_config(self) -> EngineConfig:
        """Convenience method to get engine timings."""
        return self.get_config().engine

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def _fallback(self, message: str) -> BoardsyncConfig:
        self._config_error = message
        logger.warning("%s; using default configuration", message)
        return BoardsyncConfig.default()

    def _load_config(self) -> BoardsyncConfig:
        """Load boardsync.yml, falling back to defaults on any problem."""
        config_path = self.project_root / self.CONFIG_FILE
        self._config_error = None

        if not config_path.exists():
            logger.debug("No %s in %s", self.CONFIG_FILE, self.project_root)
            return BoardsyncConfig.default()

        try:
            data = yaml.safe_load(config_path.read_text())
        except yaml.YAMLError as e:
            return self._fallback(f"Invalid YAML in {self.CONFIG_FILE}: {e}")

        if data is None:
            return self._fallback(f"{self.CONFIG_FILE} is empty")
        if not isinstance(data, dict):
            return self._fallback(f"Error loading {self.CONFIG_FILE}: expected a mapping")

        # Omitted lists keep the default columns and priorities
        defaults = BoardsyncConfig.default()
        data.setdefault("columns", [c.model_dump() for c in defaults.columns])
        data.setdefault("priorities", [p.model_dump() for p in defaults.priorities])

        try:
            config = BoardsyncConfig.model_validate(data)
        except ValidationError as e:
            return self._fallback(f"Error loading {self.CONFIG_FILE}: {e}")

        logger.info("Loaded %s (board_root=%s)", config_path, config.board_root)
        return config
