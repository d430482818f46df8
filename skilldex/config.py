"""Configuration management for skilldex."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _substitute_env_vars(value: Any) -> Any:
    """Recursively substitute environment variables in config values.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax.
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}:]+)(?::-([^}]*))?\}'

        def replacer(match: re.Match) -> str:
            var_name = match.group(1)
            default = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default)

        return re.sub(pattern, replacer, value)
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]
    return value


class SkillsConfig(BaseModel):
    """Skill tree discovery configuration."""
    root: str = "skills"
    extension: str = ".md"
    marker: str = "---"
    exclude_dirs: list[str] = Field(
        default_factory=lambda: [".git", "node_modules", "__pycache__"]
    )
    disabled_skills: list[str] = Field(default_factory=list)


class MatcherConfig(BaseModel):
    """Relevance scoring configuration."""
    tag_weight: int = Field(default=2, ge=0)
    description_weight: int = Field(default=1, ge=0)
    max_results: int = Field(default=10, ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    format: str = "text"


class Config(BaseSettings):
    """Main skilldex configuration."""
    model_config = SettingsConfigDict(env_prefix="SKILLDEX_", env_nested_delimiter="__")

    skills: SkillsConfig = Field(default_factory=SkillsConfig)
    matcher: MatcherConfig = Field(default_factory=MatcherConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG_PATH = "skilldex.yaml"


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> Config:
    """Load configuration from YAML file with environment variable substitution.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Loaded and validated Config object.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        return Config()

    config_data = _substitute_env_vars(raw_config)

    return Config(**config_data)


def generate_default_config() -> str:
    """Return the default configuration file contents."""
    return """\
# skilldex configuration
# Environment variables can be substituted with ${VAR_NAME} syntax

skills:
  root: "${SKILLDEX_ROOT:-skills}"
  extension: ".md"
  marker: "---"
  exclude_dirs:
    - .git
    - node_modules
    - __pycache__
  disabled_skills: []

matcher:
  tag_weight: 2
  description_weight: 1
  max_results: 10

logging:
  level: "INFO"
  format: "text"   # or "json"
"""
