"""
Configuration system for equalsguard

Provides configuration management with support for files and environment variables.
Includes validation, default value handling, and configuration merging.
"""

import os
import json
import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any
import logging

logger = logging.getLogger(__name__)

RESOLUTION_STRATEGIES = ["convention", "scope"]
OUTPUT_FORMATS = ["text", "json"]

# java.util.Objects was introduced in Java 7
MINIMUM_LANGUAGE_LEVEL = 7


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigurationManager:
    """Manages configuration loading, validation, and merging."""

    DEFAULT_CONFIG_PATHS = [
        "equalsguard.json",
        "equalsguard.yaml",
        "equalsguard.yml",
        ".equalsguard.json",
        ".equalsguard.yaml",
        ".equalsguard.yml",
        os.path.expanduser("~/.equalsguard.json"),
        os.path.expanduser("~/.equalsguard.yaml"),
    ]

    @staticmethod
    def find_config_file(search_paths: Optional[List[str]] = None) -> Optional[str]:
        """Find the first existing configuration file."""
        paths = search_paths or ConfigurationManager.DEFAULT_CONFIG_PATHS

        for path in paths:
            if os.path.exists(path):
                return path
        return None

    @staticmethod
    def load_config_file(config_path: str) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.endswith((".yaml", ".yml")):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Invalid configuration file format: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must contain a mapping at the top level")
        return data

    @staticmethod
    def load_env_config() -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config = {}

        inspection = {}
        require_guard = _env_flag("EQUALSGUARD_REQUIRE_NULL_GUARD")
        if require_guard is not None:
            inspection["require_explicit_null_guard"] = require_guard

        if os.getenv("EQUALSGUARD_LANGUAGE_LEVEL"):
            try:
                inspection["language_level"] = int(os.getenv("EQUALSGUARD_LANGUAGE_LEVEL"))
            except ValueError:
                logger.warning("Invalid EQUALSGUARD_LANGUAGE_LEVEL value, using default")

        if os.getenv("EQUALSGUARD_HELPER_NAME"):
            inspection["helper_name"] = os.getenv("EQUALSGUARD_HELPER_NAME")

        if inspection:
            config["inspection"] = inspection

        if os.getenv("EQUALSGUARD_RESOLUTION_STRATEGY"):
            strategy = os.getenv("EQUALSGUARD_RESOLUTION_STRATEGY").lower()
            if strategy in RESOLUTION_STRATEGIES:
                config["resolution"] = {"strategy": strategy}
            else:
                logger.warning("Invalid EQUALSGUARD_RESOLUTION_STRATEGY value, using default")

        output = {}
        if os.getenv("EQUALSGUARD_OUTPUT_FORMAT"):
            output_format = os.getenv("EQUALSGUARD_OUTPUT_FORMAT").lower()
            if output_format in OUTPUT_FORMATS:
                output["format"] = output_format
            else:
                logger.warning("Invalid EQUALSGUARD_OUTPUT_FORMAT value, using default")

        if os.getenv("EQUALSGUARD_MAX_WORKERS"):
            try:
                output["max_workers"] = int(os.getenv("EQUALSGUARD_MAX_WORKERS"))
            except ValueError:
                logger.warning("Invalid EQUALSGUARD_MAX_WORKERS value, using default")

        if output:
            config["output"] = output

        return config

    @staticmethod
    def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge multiple configuration dictionaries, with later ones taking precedence."""
        result = {}

        for config in configs:
            if not config:
                continue

            for key, value in config.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = ConfigurationManager.merge_configs(result[key], value)
                else:
                    result[key] = value

        return result

    @staticmethod
    def validate_config(config_data: Dict[str, Any]) -> None:
        """Validate configuration data."""
        for section in ("inspection", "resolution", "output"):
            if section in config_data and not isinstance(config_data[section], dict):
                raise ConfigurationError(f"{section} must be a mapping")

        if "inspection" in config_data:
            inspection = config_data["inspection"]

            if "language_level" in inspection:
                level = inspection["language_level"]
                if not isinstance(level, int) or isinstance(level, bool) or level <= 0:
                    raise ConfigurationError("language_level must be a positive integer")

            if "require_explicit_null_guard" in inspection and not isinstance(
                inspection["require_explicit_null_guard"], bool
            ):
                raise ConfigurationError("require_explicit_null_guard must be a boolean")

            for key in ("helper_name", "method_name"):
                if key in inspection:
                    value = inspection[key]
                    if not isinstance(value, str) or not value.strip():
                        raise ConfigurationError(f"{key} must be a non-empty string")

        if "resolution" in config_data:
            resolution = config_data["resolution"]

            if "strategy" in resolution and resolution["strategy"] not in RESOLUTION_STRATEGIES:
                raise ConfigurationError(f"strategy must be one of: {RESOLUTION_STRATEGIES}")

            for key in ("variables", "classes", "packages"):
                if key in resolution:
                    names = resolution[key]
                    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
                        raise ConfigurationError(f"resolution.{key} must be a list of names")

        if "output" in config_data:
            output = config_data["output"]

            if "format" in output and output["format"] not in OUTPUT_FORMATS:
                raise ConfigurationError(f"format must be one of: {OUTPUT_FORMATS}")

            if "max_workers" in output:
                workers = output["max_workers"]
                if not isinstance(workers, int) or isinstance(workers, bool) or workers <= 0:
                    raise ConfigurationError("max_workers must be positive")


@dataclass
class InspectionConfig:
    """Configuration for the equality inspection."""

    require_explicit_null_guard: bool = False
    language_level: int = 8
    helper_name: str = "java.util.Objects.equals"
    method_name: str = "equals"

    def is_applicable(self) -> bool:
        """Whether the null-safe helper exists at the configured language level."""
        return self.language_level >= MINIMUM_LANGUAGE_LEVEL


@dataclass
class ResolutionConfig:
    """Configuration for symbol resolution."""

    strategy: str = "convention"
    variables: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)
    packages: List[str] = field(
        default_factory=lambda: ["java", "javax", "com", "org", "net"]
    )


@dataclass
class OutputConfig:
    """Configuration for reporting."""

    format: str = "text"
    use_rich: bool = True
    max_workers: int = 1


@dataclass
class EqualsGuardConfig:
    """Main configuration class for equalsguard."""

    inspection_settings: InspectionConfig = field(default_factory=InspectionConfig)
    resolution_settings: ResolutionConfig = field(default_factory=ResolutionConfig)
    output_settings: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def default(cls) -> "EqualsGuardConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        use_env: bool = True,
        validate: bool = True,
    ) -> "EqualsGuardConfig":
        """
        Load configuration from multiple sources with precedence:
        1. Default values
        2. Configuration file
        3. Environment variables (if use_env=True)

        Args:
            config_path: Path to configuration file. If None, searches for default files.
            use_env: Whether to load environment variables
            validate: Whether to validate the configuration
        """
        configs_to_merge = []

        file_config = {}
        if config_path:
            file_config = ConfigurationManager.load_config_file(config_path)
        else:
            found_config = ConfigurationManager.find_config_file()
            if found_config:
                file_config = ConfigurationManager.load_config_file(found_config)
                logger.info(f"Loaded configuration from: {found_config}")

        configs_to_merge.append(file_config)

        if use_env:
            configs_to_merge.append(ConfigurationManager.load_env_config())

        merged_config = ConfigurationManager.merge_configs(*configs_to_merge)

        if validate:
            ConfigurationManager.validate_config(merged_config)

        return cls.from_dict(merged_config)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EqualsGuardConfig":
        """Build a configuration from a (merged) dictionary, ignoring unknown keys."""
        sections = (
            ("inspection", InspectionConfig()),
            ("resolution", ResolutionConfig()),
            ("output", OutputConfig()),
        )
        for section_name, section in sections:
            for key, value in (data.get(section_name) or {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    logger.warning(f"Ignoring unknown configuration key: {section_name}.{key}")

        return cls(
            inspection_settings=sections[0][1],
            resolution_settings=sections[1][1],
            output_settings=sections[2][1],
        )

    @classmethod
    def from_file(cls, config_path: str) -> "EqualsGuardConfig":
        """Load configuration from a file only."""
        return cls.load(config_path=config_path, use_env=False)

    @classmethod
    def from_env(cls) -> "EqualsGuardConfig":
        """Load configuration from environment variables."""
        return cls.load(config_path=None, use_env=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "inspection": asdict(self.inspection_settings),
            "resolution": asdict(self.resolution_settings),
            "output": asdict(self.output_settings),
        }

    def to_file(self, config_path: str, format: str = "json") -> None:
        """
        Save configuration to file.

        Args:
            config_path: Path to save configuration
            format: File format ('json' or 'yaml')
        """
        config_data = self.to_dict()

        try:
            with open(config_path, "w", encoding="utf-8") as f:
                if format.lower() == "yaml":
                    yaml.dump(config_data, f, default_flow_style=False, indent=2)
                else:
                    json.dump(config_data, f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Error saving configuration file: {e}")

    def validate(self) -> None:
        """Validate the current configuration."""
        ConfigurationManager.validate_config(self.to_dict())

    def get_config_summary(self) -> str:
        """Get a human-readable summary of the configuration."""
        inspection = self.inspection_settings
        resolution = self.resolution_settings
        return f"""equalsguard Configuration Summary:
Inspection:
  - Require explicit null guard: {inspection.require_explicit_null_guard}
  - Language level: {inspection.language_level} (applicable: {inspection.is_applicable()})
  - Helper: {inspection.helper_name}
  - Method: {inspection.method_name}

Resolution:
  - Strategy: {resolution.strategy}
  - Variables: {len(resolution.variables)} names
  - Classes: {len(resolution.classes)} names
  - Package roots: {', '.join(resolution.packages)}

Output:
  - Format: {self.output_settings.format}
  - Rich output: {self.output_settings.use_rich}
  - Max workers: {self.output_settings.max_workers}
"""


def load_config(config_path: Optional[str] = None, use_env: bool = True) -> EqualsGuardConfig:
    """
    Load configuration from file and/or environment variables.

    Args:
        config_path: Path to configuration file
        use_env: Whether to load environment variables

    Returns:
        EqualsGuardConfig: Loaded configuration
    """
    return EqualsGuardConfig.load(config_path=config_path, use_env=use_env)
