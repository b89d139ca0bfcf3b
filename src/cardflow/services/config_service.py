"""Configuration service for loading cardflow.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import BoardConfig, CardflowConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching board configuration."""

    CONFIG_FILE = "cardflow.yml"

    def __init__(self, project_root: Path) -> None:
        """Initialize the config service.

        Args:
            project_root: Directory that may contain cardflow.yml
        """
        self.project_root = project_root
        self._config: CardflowConfig | None = None
        self._config_error: str | None = None

    @property
    def config_path(self) -> Path:
        return self.project_root / self.CONFIG_FILE

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def get_config(self) -> CardflowConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_board_config(self) -> BoardConfig:
        """Convenience method to get board configuration."""
        return self.get_config().board

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def _load_config(self) -> CardflowConfig:
        """Load configuration from file, falling back to defaults on any problem."""
        self._config_error = None

        if not self.config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return CardflowConfig.default()

        try:
            with self.config_path.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return CardflowConfig.default()
        except OSError as e:
            self._config_error = f"Error reading {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return CardflowConfig.default()

        if data is None:
            self._config_error = f"{self.CONFIG_FILE} is empty"
            logger.warning(self._config_error)
            return CardflowConfig.default()

        if not isinstance(data, dict):
            self._config_error = f"{self.CONFIG_FILE} must contain a mapping"
            logger.warning(self._config_error)
            return CardflowConfig.default()

        try:
            config = CardflowConfig(**data)
        except ValidationError as e:
            self._config_error = f"Invalid {self.CONFIG_FILE}: {e.error_count()} error(s)"
            logger.warning("%s\n%s", self._config_error, e)
            return CardflowConfig.default()

        logger.info(
            "Loaded %s (default %d cards, search cap %d)",
            self.CONFIG_FILE,
            config.board.default_card_count,
            config.board.search_cap,
        )
        return config
