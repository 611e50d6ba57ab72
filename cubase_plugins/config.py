"""Configuration for which projects and plugins get reported.

Example config:
	path_ignore_patterns = ["*/Backup/*"]

	[projects]
	report_32_bit = true
	report_64_bit = true

	[plugins]
	guid_ignores = ["56535450726F62726F2D513300000000"]
	name_ignores = ["Frequency"]
"""

from __future__ import annotations

import logging
import os
import tomllib
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)


CONFIG_FILENAME = "cubase-project-plugins.toml"


class ProjectsConfig(BaseModel):
	model_config = ConfigDict(extra="forbid")

	report_32_bit: bool = True
	report_64_bit: bool = True


class PluginsConfig(BaseModel):
	model_config = ConfigDict(extra="forbid")

	# Matching on GUID is more reliable than name for Cubase's bundled plugins.
	guid_ignores: List[str] = []
	name_ignores: List[str] = []


class Config(BaseModel):
	model_config = ConfigDict(extra="forbid")

	path_ignore_patterns: List[str] = []
	projects: ProjectsConfig = ProjectsConfig()
	plugins: PluginsConfig = PluginsConfig()


def default_config_path() -> str:
	return os.path.join(os.path.expanduser("~"), ".config", CONFIG_FILENAME)


def load_config(path: str) -> Config:
	try:
		with open(path, "rb") as fh:
			data = tomllib.load(fh)
	except OSError as e:
		raise ConfigError(f"Unable to read the config file {path}: {e}") from e
	except tomllib.TOMLDecodeError as e:
		raise ConfigError(f"Unable to parse the config file {path}: {e}") from e

	try:
		return Config.model_validate(data)
	except ValidationError as e:
		raise ConfigError(f"Invalid config file {path}: {e}") from e


def resolve_config(path: Optional[str] = None) -> Config:
	"""Load the given config, else the default config file if present, else defaults."""
	if path is not None:
		logger.info("Loading config from %s", path)
		return load_config(path)

	default_path = default_config_path()
	if os.path.isfile(default_path):
		logger.info("Loading config from %s", default_path)
		return load_config(default_path)

	logger.debug("No config file at %s, using defaults", default_path)
	return Config()
