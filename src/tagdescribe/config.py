"""Configuration file support for tagdescribe.

This module handles loading and parsing the .tagdescribe.yaml configuration
file. Every setting is optional; command line options take precedence.
Example:

    describe:
      prefix: "v"
      release_mode: release-branch
      tie_break: annotated-then-name
      max_depth: 5000

    abbrev:
      min_length: 7
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any
import logging
import yaml

from .graph import DEFAULT_ABBREV_LENGTH
from .models import ReleaseMode
from .tie_breaks import DEFAULT_TIE_BREAK, TIE_BREAK_REGISTRY

log = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = ".tagdescribe.yaml"


def _parse_release_mode(value: Any) -> ReleaseMode:
    try:
        return ReleaseMode(value)
    except ValueError:
        choices = ", ".join(mode.value for mode in ReleaseMode)
        raise ValueError(f"Invalid release_mode '{value}' (expected one of: {choices})")


@dataclass
class DescribeConfig:
    """Configuration for the describe command.

    Attributes:
        prefix: Only a nearest tag starting with this prefix is used.
        release_mode: Exact-match formatting rule.
        tie_break: Name of the policy choosing among tags on one commit.
        max_depth: Deepest first-parent distance to search, or None.
    """

    prefix: str = ""
    release_mode: ReleaseMode = ReleaseMode.PLAIN
    tie_break: str = DEFAULT_TIE_BREAK
    max_depth: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "DescribeConfig":
        """Create a DescribeConfig from a dictionary.

        Args:
            data: Dictionary with configuration values.

        Returns:
            DescribeConfig instance with values from data.

        Raises:
            ValueError: If release_mode, tie_break or max_depth are invalid.
        """
        tie_break = data.get("tie_break", cls.tie_break)
        if tie_break not in TIE_BREAK_REGISTRY:
            raise ValueError(f"Invalid tie_break '{tie_break}'")

        max_depth = data.get("max_depth")
        if max_depth is not None and (not isinstance(max_depth, int) or max_depth < 0):
            raise ValueError(f"max_depth must be a non-negative integer, got {max_depth!r}")

        return cls(
            prefix=str(data.get("prefix", cls.prefix)),
            release_mode=_parse_release_mode(data.get("release_mode", cls.release_mode)),
            tie_break=tie_break,
            max_depth=max_depth,
        )


@dataclass
class AbbrevConfig:
    """Configuration for commit id abbreviation.

    Attributes:
        min_length: Shortest abbreviation produced; longer ones are used
            when the short form is ambiguous.
    """

    min_length: int = DEFAULT_ABBREV_LENGTH

    @classmethod
    def from_dict(cls, data: dict) -> "AbbrevConfig":
        min_length = data.get("min_length", cls.min_length)
        if not isinstance(min_length, int) or not 4 <= min_length <= 40:
            raise ValueError(f"abbrev.min_length must be between 4 and 40, got {min_length!r}")
        return cls(min_length=min_length)


@dataclass
class TagdescribeConfig:
    """Configuration settings for tagdescribe.

    Attributes:
        describe: Settings for describing HEAD.
        abbrev: Settings for abbreviating commit ids.
        _raw: Raw dictionary data for accessing arbitrary sections.
    """

    describe: DescribeConfig = field(default_factory=DescribeConfig)
    abbrev: AbbrevConfig = field(default_factory=AbbrevConfig)
    _raw: Dict[str, Any] = field(default_factory=dict)

    def get_section(self, name: str) -> Dict[str, Any]:
        return self._raw.get(name, {})

    @classmethod
    def from_dict(cls, data: dict) -> "TagdescribeConfig":
        """Create a TagdescribeConfig from a dictionary.

        Unknown keys are kept in _raw.

        Args:
            data: Dictionary with configuration values.

        Returns:
            TagdescribeConfig instance, using defaults for missing sections.
        """
        describe_data = data.get("describe") or {}
        abbrev_data = data.get("abbrev") or {}

        return cls(
            describe=DescribeConfig.from_dict(describe_data),
            abbrev=AbbrevConfig.from_dict(abbrev_data),
            _raw=data,
        )


def load_config(config_path: Optional[str] = None) -> TagdescribeConfig:
    """Load configuration from a YAML file.

    If config_path is explicitly provided and the file doesn't exist, raises an error.
    If config_path is None and the default .tagdescribe.yaml doesn't exist, returns
    default config.

    Args:
        config_path: Path to the config file, or None to use the default path.

    Returns:
        TagdescribeConfig instance with loaded or default values.

    Raises:
        FileNotFoundError: If config_path is explicitly provided but file doesn't exist.
        yaml.YAMLError: If the config file contains invalid YAML.
        ValueError: If the config file contains invalid values.
    """
    explicit_path = config_path is not None
    path = Path(config_path) if config_path else Path(DEFAULT_CONFIG_PATH)

    if not path.exists():
        if explicit_path:
            raise FileNotFoundError(f"Config file not found: {path}")
        return TagdescribeConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    # Handle empty file or file with only comments
    if data is None:
        return TagdescribeConfig()

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a YAML mapping (dictionary)")

    log.debug(f"Loaded config from {path}")
    return TagdescribeConfig.from_dict(data)
