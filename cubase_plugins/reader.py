"""Extracts the application version and plugins used from a Cubase project file.

The *.cpr format is undocumented, so rather than parsing it we walk the raw
bytes looking for two markers and decode the length-prefixed tokens which
follow them at fixed offsets.
"""

from __future__ import annotations

from typing import Optional, Set, Tuple

from .errors import ProjectReadError, ReadErrorKind
from .model import Metadata, Plugin, Project


APP_VERSION_MARKER = b"PAppVersion\x00"
PLUGIN_UID_MARKER = b"Plugin UID\x00"

PLUGIN_NAME_KEY = "Plugin Name"
ORIGINAL_PLUGIN_NAME_KEY = "Original Plugin Name"

VERSION_PREFIX = "Version "
UNSPECIFIED_ARCHITECTURE = "Unspecified"

# Padding between the end of one token and the start of the next.
_APP_VERSION_PADDING = 9
_APPLICATION_PADDING = 3
_VERSION_PADDING = 3
_RELEASE_DATE_PADDING = 7

_PLUGIN_UID_PADDING = 22
_GUID_PADDING = 3
_NAME_KEY_PADDING = 5
_NAME_PADDING = 3
_ORIGINAL_NAME_KEY_PADDING = 5


def _decode_text(payload: bytes) -> str:
	# Older projects don't nul terminate their tokens.
	nul = payload.find(b"\x00")
	if nul != -1:
		payload = payload[:nul]
	return payload.decode("utf-8", errors="replace")


def read_token(data: bytes, offset: int) -> Tuple[str, int]:
	"""Read the length-prefixed token at ``offset``.

	Returns the decoded text and the number of bytes consumed including the
	length byte itself.
	"""
	if offset < 0 or offset >= len(data):
		raise ProjectReadError(ReadErrorKind.LENGTH_BEYOND_EOF, offset)
	length = data[offset]
	start = offset + 1
	end = start + length
	if end > len(data):
		raise ProjectReadError(ReadErrorKind.TOKEN_BEYOND_EOF, offset)
	return _decode_text(bytes(data[start:end])), length + 1


def _read_required(data: bytes, offset: int, kind: ReadErrorKind) -> Tuple[str, int]:
	try:
		return read_token(data, offset)
	except ProjectReadError as e:
		raise ProjectReadError(kind, offset) from e


def _has_marker(data: bytes, offset: int, marker: bytes) -> bool:
	return data[offset : offset + len(marker)] == marker


def match_metadata(data: bytes, offset: int) -> Optional[Tuple[Metadata, int]]:
	"""Decode the application metadata if ``offset`` holds the app version marker.

	Returns ``None`` when the marker is absent, otherwise the metadata and the
	offset just past the last token read.
	"""
	if not _has_marker(data, offset, APP_VERSION_MARKER):
		return None

	cursor = offset + len(APP_VERSION_MARKER) + _APP_VERSION_PADDING
	application, consumed = _read_required(data, cursor, ReadErrorKind.NO_APPLICATION)
	cursor += consumed + _APPLICATION_PADDING
	version, consumed = _read_required(data, cursor, ReadErrorKind.NO_VERSION)
	cursor += consumed + _VERSION_PADDING
	release_date, consumed = _read_required(data, cursor, ReadErrorKind.NO_RELEASE_DATE)
	cursor += consumed

	# Older 32-bit versions of Cubase didn't store the architecture.
	try:
		architecture, consumed = read_token(data, cursor + _RELEASE_DATE_PADDING)
	except ProjectReadError:
		architecture = UNSPECIFIED_ARCHITECTURE
	else:
		cursor += _RELEASE_DATE_PADDING + consumed

	if version.startswith(VERSION_PREFIX):
		version = version[len(VERSION_PREFIX) :]

	metadata = Metadata(
		application=application,
		version=version,
		release_date=release_date,
		architecture=architecture,
	)
	return metadata, cursor


def match_plugin(data: bytes, offset: int) -> Optional[Tuple[Plugin, int]]:
	"""Decode a plugin record if ``offset`` holds the plugin UID marker.

	When the name token is followed by an "Original Plugin Name" key, the
	plugin was renamed in the project and the original name is used instead.
	Any other key is left unread for the scanner to look at.
	"""
	if not _has_marker(data, offset, PLUGIN_UID_MARKER):
		return None

	cursor = offset + len(PLUGIN_UID_MARKER) + _PLUGIN_UID_PADDING
	guid, consumed = _read_required(data, cursor, ReadErrorKind.NO_PLUGIN_GUID)
	cursor += consumed + _GUID_PADDING

	key, consumed = _read_required(data, cursor, ReadErrorKind.NO_PLUGIN_NAME)
	if key != PLUGIN_NAME_KEY:
		raise ProjectReadError(ReadErrorKind.NO_PLUGIN_NAME, cursor)
	cursor += consumed + _NAME_KEY_PADDING

	name, consumed = _read_required(data, cursor, ReadErrorKind.NO_PLUGIN_NAME)
	cursor += consumed

	key, consumed = _read_required(
		data, cursor + _NAME_PADDING, ReadErrorKind.NO_TOKEN_AFTER_PLUGIN_NAME
	)
	if key == ORIGINAL_PLUGIN_NAME_KEY:
		cursor += _NAME_PADDING + consumed + _ORIGINAL_NAME_KEY_PADDING
		name, consumed = _read_required(data, cursor, ReadErrorKind.NO_ORIGINAL_PLUGIN_NAME)
		cursor += consumed

	return Plugin(guid=guid, name=name), cursor


def read_project(data: bytes) -> Project:
	"""Scan ``data`` once from start to end and build the Project it describes.

	Raises ProjectReadError when no metadata is found or when a recognised
	record is broken.
	"""
	metadata: Optional[Metadata] = None
	plugins: Set[Plugin] = set()
	if isinstance(data, memoryview):
		data = data.tobytes()
	cursor = 0

	while True:
		# Both markers start with a P.
		cursor = data.find(b"P", cursor)
		if cursor == -1:
			break

		if metadata is None:
			found_metadata = match_metadata(data, cursor)
			if found_metadata is not None:
				metadata, cursor = found_metadata
				continue

		found_plugin = match_plugin(data, cursor)
		if found_plugin is not None:
			plugin, cursor = found_plugin
			plugins.add(plugin)
			continue

		cursor += 1

	if metadata is None:
		raise ProjectReadError(ReadErrorKind.CORRUPT_PROJECT)

	return Project(metadata=metadata, plugins=frozenset(plugins))
