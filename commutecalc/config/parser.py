"""
Configuration file parser for CommuteCalc
Handles YAML and JSON configuration files with validation
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import ConfigFormat, EngineConfig


class ConfigParserError(Exception):
    """Configuration parsing error"""
    pass


class ConfigParser:
    """Parser for CommuteCalc configuration files"""

    @staticmethod
    def detect_format(file_path: Path) -> ConfigFormat:
        """Detect configuration file format from extension"""
        suffix = file_path.suffix.lower()

        if suffix in ['.yaml', '.yml']:
            return ConfigFormat.YAML
        elif suffix == '.json':
            return ConfigFormat.JSON
        else:
            raise ConfigParserError(f"Unsupported file format: {suffix}")

    @staticmethod
    def load_file(file_path: Path) -> Dict[str, Any]:
        """Load configuration file content"""
        if not file_path.exists():
            raise ConfigParserError(f"Configuration file not found: {file_path}")

        format_type = ConfigParser.detect_format(file_path)

        try:
            content = file_path.read_text(encoding='utf-8')

            if format_type == ConfigFormat.YAML:
                data = yaml.safe_load(content) or {}
            else:
                data = json.loads(content)

        except yaml.YAMLError as e:
            raise ConfigParserError(f"Invalid YAML syntax: {e}")
        except json.JSONDecodeError as e:
            raise ConfigParserError(f"Invalid JSON syntax: {e}")
        except OSError as e:
            raise ConfigParserError(f"Error reading file: {e}")

        if not isinstance(data, dict):
            raise ConfigParserError(f"Configuration must be a mapping, got {type(data).__name__}")
        return data

    @staticmethod
    def save_file(config: EngineConfig, file_path: Path, format_type: Optional[ConfigFormat] = None) -> None:
        """Save configuration to file"""
        if format_type is None:
            format_type = ConfigParser.detect_format(file_path)

        # Ensure parent directory exists
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = config.model_dump(exclude_none=True, mode='json')

        if format_type == ConfigFormat.YAML:
            content = yaml.dump(
                config_dict,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                indent=2
            )
        else:
            content = json.dumps(config_dict, indent=2, ensure_ascii=False)

        try:
            file_path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise ConfigParserError(f"Error saving file: {e}")

    @staticmethod
    def parse_engine_config(data: Dict[str, Any]) -> EngineConfig:
        """Parse an EngineConfig from dictionary data"""
        normalized = dict(data)

        # Accept backend names in any case
        for key in ('geocoder', 'router'):
            if isinstance(normalized.get(key), str):
                normalized[key] = normalized[key].lower()

        try:
            return EngineConfig(**normalized)
        except ValidationError as e:
            raise ConfigParserError(f"Invalid engine configuration: {e}")

    @staticmethod
    def parse_config(file_path: Path) -> EngineConfig:
        """Load and validate a configuration file"""
        return ConfigParser.parse_engine_config(ConfigParser.load_file(file_path))
