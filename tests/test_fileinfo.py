import os
from datetime import datetime, timezone

from aether import fileinfo


def test_file_exists_for_file_and_dir(tmp_path):
    path = tmp_path / "a.ndjson"
    path.write_text("{}")
    assert fileinfo.file_exists(path) is True
    assert fileinfo.file_exists(str(tmp_path)) is True


def test_file_exists_false_when_missing(tmp_path):
    assert fileinfo.file_exists(tmp_path / "missing") is False


def test_dir_exists(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("x")
    assert fileinfo.dir_exists(tmp_path) is True
    assert fileinfo.dir_exists(path) is False
    assert fileinfo.dir_exists(tmp_path / "missing") is False


def test_get_file_size_matches_content(tmp_path):
    data = b'{"resourceType":"Patient","id":"1"}\n'
    path = tmp_path / "p.ndjson"
    path.write_bytes(data)
    assert fileinfo.get_file_size(path) == len(data)


def test_get_file_size_missing_is_zero(tmp_path):
    assert fileinfo.get_file_size(tmp_path / "missing") == 0


def test_get_file_mod_time_reflects_utime(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("x")
    stamp = 1_600_000_000
    os.utime(path, (stamp, stamp))
    result = fileinfo.get_file_mod_time(path)
    assert result == datetime.fromtimestamp(stamp, tz=timezone.utc)


def test_get_file_mod_time_missing_is_none(tmp_path):
    assert fileinfo.get_file_mod_time(tmp_path / "missing") is None