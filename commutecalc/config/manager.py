"""
Configuration manager for CommuteCalc
Resolves, loads and saves the engine configuration file
"""

from pathlib import Path
from typing import Optional

from .models import EngineConfig
from .parser import ConfigParser, ConfigParserError


class ConfigManagerError(Exception):
    """Configuration manager error"""
    pass


class ConfigManager:
    """Manager for the CommuteCalc configuration file"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration manager

        Args:
            config_dir: Directory for configuration files (defaults to ~/.commutecalc)
        """
        if config_dir is None:
            config_dir = Path.home() / ".commutecalc"

        self.config_dir = config_dir
        self.default_config_file = self.config_dir / "config.yaml"

    def load_config(self, config_path: Optional[Path] = None) -> EngineConfig:
        """
        Load configuration from file

        Without an explicit path, a missing default file yields the built-in
        defaults.

        Args:
            config_path: Path to config file (defaults to config.yaml)

        Returns:
            EngineConfig instance

        Raises:
            ConfigManagerError: If loading fails
        """
        if config_path is None:
            if not self.default_config_file.exists():
                return EngineConfig()
            config_path = self.default_config_file

        try:
            return ConfigParser.parse_config(config_path)
        except ConfigParserError as e:
            raise ConfigManagerError(f"Failed to load configuration: {e}")

    def save_config(self, config: EngineConfig, config_path: Optional[Path] = None) -> Path:
        """
        Save configuration to file

        Args:
            config: Configuration to save
            config_path: Path to save to (defaults to config.yaml)

        Returns:
            Path written

        Raises:
            ConfigManagerError: If saving fails
        """
        if config_path is None:
            config_path = self.default_config_file

        try:
            ConfigParser.save_file(config, config_path)
        except ConfigParserError as e:
            raise ConfigManagerError(f"Failed to save configuration: {e}")
        return config_path

    def create_default_config(self, overwrite: bool = False) -> Path:
        """
        Write the built-in defaults to the default config file

        Args:
            overwrite: Whether to overwrite existing file

        Returns:
            Path to created config file

        Raises:
            ConfigManagerError: If the file exists and overwrite is False
        """
        if self.default_config_file.exists() and not overwrite:
            raise ConfigManagerError(
                f"Default config already exists: {self.default_config_file}. "
                "Use overwrite=True to replace it."
            )

        return self.save_config(EngineConfig(), self.default_config_file)
