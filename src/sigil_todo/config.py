"""Configuration management for sigil-todo."""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.sigil_todo/config.yaml"


@dataclass
class RenderStyle:
    """Colors and terminal effects used when drawing the list."""

    in_progress: str = "yellow"
    finished: str = "green"
    closed: str = "bright_black"
    strike: bool = True
    no_color: bool = False
    clear_screen: bool = True

    def __post_init__(self):
        _check_types(self, {
            "in_progress": str, "finished": str, "closed": str,
            "strike": bool, "no_color": bool, "clear_screen": bool,
        }, "style")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RenderStyle":
        return cls(**_known_keys(cls, data or {}, "style"))


@dataclass
class ConfigModel:
    """Global configuration model for sigil-todo."""

    # File paths
    todo_file: str = "~/.todo"
    archive_file: str = "~/.todo.old"
    create_missing: bool = True

    # Display preferences
    show_closed: bool = True
    prompt: str = ">: "
    style: RenderStyle = field(default_factory=RenderStyle)

    # Logging
    log_file: Optional[str] = None
    log_level: str = "WARNING"

    def __post_init__(self):
        """Check value types and expand user paths."""
        _check_types(self, {
            "todo_file": str, "archive_file": str, "create_missing": bool,
            "show_closed": bool, "prompt": str, "log_file": (str, type(None)),
            "log_level": str,
        }, "config")
        self.todo_file = os.path.expanduser(self.todo_file)
        self.archive_file = os.path.expanduser(self.archive_file)
        if self.log_file:
            self.log_file = os.path.expanduser(self.log_file)
        if isinstance(self.style, dict):
            self.style = RenderStyle.from_dict(self.style)
        elif not isinstance(self.style, RenderStyle):
            raise TypeError(f"style must be a mapping, got {type(self.style).__name__}")

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "todo_file": self.todo_file,
            "archive_file": self.archive_file,
            "create_missing": self.create_missing,
            "show_closed": self.show_closed,
            "prompt": self.prompt,
            "log_file": self.log_file,
            "log_level": self.log_level,
            "style": {
                "in_progress": self.style.in_progress,
                "finished": self.style.finished,
                "closed": self.style.closed,
                "strike": self.style.strike,
                "no_color": self.style.no_color,
                "clear_screen": self.style.clear_screen,
            },
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping")
        return cls(**_known_keys(cls, data, "config"))


def _check_types(obj, expected: Dict[str, Any], section: str) -> None:
    """Raise TypeError for the first field whose value has the wrong type."""
    for name, types in expected.items():
        value = getattr(obj, name)
        if not isinstance(value, types):
            raise TypeError(
                f"{section} key {name} has the wrong type: {type(value).__name__}"
            )


def _known_keys(model, data: Dict[str, Any], section: str) -> Dict[str, Any]:
    """Drop keys the dataclass does not define, warning about each."""
    names = {f.name for f in fields(model)}
    for key in data:
        if key not in names:
            logger.warning(f"Ignoring unknown {section} key: {key}")
    return {k: v for k, v in data.items() if k in names}


class Config:
    """Configuration manager for sigil-todo."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file, falling back to defaults."""
        if cls._instance is not None:
            return cls._instance

        if config_path is None:
            config_path = get_config_path()

        config = ConfigModel()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    yaml_content = f.read()
                config = ConfigModel.from_yaml(yaml_content)
                logger.debug(f"Loaded configuration from {config_path}")
            except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}")
                logger.warning("Using default configuration.")
        else:
            logger.debug(f"No configuration at {config_path}, using defaults")

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(config.to_yaml())
        logger.info(f"Configuration saved to {config_path}")

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load(config_path)


def get_config_path() -> Path:
    """Get the default config file path."""
    return Path(os.path.expanduser(DEFAULT_CONFIG_PATH))


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    Config.save(config, config_path)
