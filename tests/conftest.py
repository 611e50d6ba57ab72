from __future__ import annotations

from typing import Optional

import pytest

from cubase_plugins.reader import APP_VERSION_MARKER, PLUGIN_UID_MARKER


def encode_token(text: str, nul: bool = True) -> bytes:
	payload = text.encode("utf-8") + (b"\x00" if nul else b"")
	return bytes([len(payload)]) + payload


def build_metadata(
	application: str = "Cubase",
	version: str = "Version 12.0.70",
	release_date: str = "Feb 15 2024",
	architecture: Optional[str] = "WIN64",
) -> bytes:
	data = (
		APP_VERSION_MARKER
		+ b"\x00" * 9
		+ encode_token(application)
		+ b"\x00" * 3
		+ encode_token(version)
		+ b"\x00" * 3
		+ encode_token(release_date)
	)
	if architecture is not None:
		data += b"\x00" * 7 + encode_token(architecture)
	return data


def build_plugin(
	guid: str,
	name: str,
	original_name: Optional[str] = None,
	next_key: str = "Audio Input",
) -> bytes:
	data = (
		PLUGIN_UID_MARKER
		+ b"\x00" * 22
		+ encode_token(guid)
		+ b"\x00" * 3
		+ encode_token("Plugin Name")
		+ b"\x00" * 5
		+ encode_token(name)
		+ b"\x00" * 3
	)
	if original_name is not None:
		data += encode_token("Original Plugin Name") + b"\x00" * 5 + encode_token(original_name)
	else:
		data += encode_token(next_key)
	return data


@pytest.fixture
def token():
	return encode_token


@pytest.fixture
def metadata_bytes():
	return build_metadata


@pytest.fixture
def plugin_bytes():
	return build_plugin


@pytest.fixture
def project_bytes():
	def build(architecture: Optional[str] = "WIN64", plugins=()):
		records = b"".join(b"\x00\x10" + build_plugin(guid, name) for guid, name in plugins)
		metadata = build_metadata(architecture=architecture)
		if architecture is None:
			# Whatever follows the release date would be read as the architecture.
			return b"\x01\x02header\x00" + records + b"\x00" * 16 + metadata
		return b"\x01\x02header\x00" + metadata + records + b"\x00" * 16

	return build


@pytest.fixture
def no_user_config(tmp_path, monkeypatch):
	home = tmp_path / "home"
	home.mkdir()
	monkeypatch.setenv("HOME", str(home))
	return home
