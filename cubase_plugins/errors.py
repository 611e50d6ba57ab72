from __future__ import annotations

from enum import Enum


class ReadErrorKind(str, Enum):
	LENGTH_BEYOND_EOF = "LengthBeyondEOF"
	TOKEN_BEYOND_EOF = "TokenBeyondEOF"
	CORRUPT_PROJECT = "CorruptProject"
	NO_APPLICATION = "NoApplication"
	NO_VERSION = "NoVersion"
	NO_RELEASE_DATE = "NoReleaseDate"
	NO_PLUGIN_GUID = "NoPluginGUID"
	NO_PLUGIN_NAME = "NoPluginName"
	NO_TOKEN_AFTER_PLUGIN_NAME = "NoTokenAfterPluginName"
	NO_ORIGINAL_PLUGIN_NAME = "NoOriginalPluginName"


MESSAGES = {
	ReadErrorKind.LENGTH_BEYOND_EOF: "token length byte lies beyond the end of the file",
	ReadErrorKind.TOKEN_BEYOND_EOF: "token data extends beyond the end of the file",
	ReadErrorKind.CORRUPT_PROJECT: "no application version was found, this is not a valid project file",
	ReadErrorKind.NO_APPLICATION: "unable to obtain the application name",
	ReadErrorKind.NO_VERSION: "unable to obtain the application version",
	ReadErrorKind.NO_RELEASE_DATE: "unable to obtain the application release date",
	ReadErrorKind.NO_PLUGIN_GUID: "unable to obtain the plugin GUID",
	ReadErrorKind.NO_PLUGIN_NAME: "unable to obtain the plugin name",
	ReadErrorKind.NO_TOKEN_AFTER_PLUGIN_NAME: "unable to obtain the token following the plugin name",
	ReadErrorKind.NO_ORIGINAL_PLUGIN_NAME: "unable to obtain the original plugin name",
}


class ProjectReadError(Exception):
	"""Raised when a project buffer cannot be turned into a Project.

	``kind`` is one of a closed set of reasons; ``offset`` is the buffer
	position the failing read started at, when known.
	"""

	def __init__(self, kind: ReadErrorKind, offset: int | None = None):
		self.kind = kind
		self.offset = offset
		# Keep args reconstructible so the error survives pickling.
		super().__init__(kind, offset)

	@property
	def message(self) -> str:
		return MESSAGES[self.kind]

	def __str__(self) -> str:
		return f"{self.kind.value}: {self.message}"


class ConfigError(Exception):
	"""Raised when a configuration file cannot be read or validated."""
