import os

from cubase_plugins.fs_scan import find_project_files, is_ignored, is_project_file


def _touch(path):
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_bytes(b"")
	return str(path)


def test_is_project_file():
	assert is_project_file("Song.cpr")
	assert is_project_file("SONG.CPR")
	assert not is_project_file("Song.cpr.bak")
	assert not is_project_file("Song.npr")


def test_is_ignored():
	assert is_ignored("/music/Song/Backup/Song.cpr", ["*/Backup/*"])
	assert not is_ignored("/music/Song/Song.cpr", ["*/Backup/*"])
	assert not is_ignored("/music/Song/Song.cpr", [])


def test_find_project_files(tmp_path):
	a = _touch(tmp_path / "Album" / "Track 1" / "Track 1.cpr")
	b = _touch(tmp_path / "Album" / "Track 2" / "TRACK 2.CPR")
	_touch(tmp_path / "Album" / "Track 2" / "notes.txt")
	_touch(tmp_path / "Album" / "Track 2" / "Backup" / "TRACK 2-01.bak")
	c = _touch(tmp_path / "Single.cpr")

	found = find_project_files([str(tmp_path)])
	assert sorted(found) == sorted([a, b, c])
	assert all(os.path.isabs(p) for p in found)


def test_find_project_files_ignores(tmp_path):
	keep = _touch(tmp_path / "Song" / "Song.cpr")
	_touch(tmp_path / "Song" / "Backup" / "Song-01.cpr")

	assert find_project_files([str(tmp_path)], ["*/Backup/*"]) == [keep]


def test_find_project_files_multiple_roots(tmp_path):
	first = _touch(tmp_path / "one" / "a.cpr")
	second = _touch(tmp_path / "two" / "b.cpr")

	found = find_project_files([str(tmp_path / "two"), str(tmp_path / "one")])
	assert found == [second, first]


def test_find_project_files_skips_missing_root(tmp_path, caplog):
	song = _touch(tmp_path / "Song.cpr")

	found = find_project_files([str(tmp_path / "missing"), str(tmp_path)])
	assert found == [song]
	assert "not a directory" in caplog.text
