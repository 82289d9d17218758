#!/usr/bin/env python3

import os
from datetime import datetime

import pytest

from video_date_rename import cli
from video_date_rename import probe as probe_module
from video_date_rename.core import DEFAULT_MIN_DATE


@pytest.fixture
def no_ffprobe(monkeypatch):
    def fake(filename, cmd="ffprobe", **kwargs):
        raise FileNotFoundError(cmd)

    monkeypatch.setattr(probe_module.ffmpeg, "probe", fake)


def make_file(directory, name, modified):
    path = directory / name
    path.write_bytes(b"\x00")
    os.utime(path, (modified.timestamp(), modified.timestamp()))
    return path


def test_defaults():
    config = cli.parse_config(cli.build_parser().parse_args([]))
    assert config.prefix == ""
    assert config.min_date == DEFAULT_MIN_DATE
    assert config.max_date is None
    assert not config.dry_run


def test_positional_arguments():
    args = cli.build_parser().parse_args(["vac", "2021-07-01", "2021-07-31", "--dry-run"])
    config = cli.parse_config(args)
    assert config.prefix == "vac"
    assert config.min_date == datetime(2021, 7, 1)
    assert config.max_date == datetime(2021, 7, 31)
    assert config.dry_run


@pytest.mark.parametrize("argv, message", [
    (["vac", "01-07-2021"], "Error: Second argument (min_date) must be formatted 9999-12-31"),
    (["vac", "2021-07-01", "July"], "Error: Third argument (max_date) must be formatted 9999-12-31"),
])
def test_invalid_date_changes_nothing(tmp_path, monkeypatch, capsys, no_ffprobe, argv, message):
    path = make_file(tmp_path, "clip.mp4", datetime(2021, 7, 4, 12, 0, 0))
    monkeypatch.setattr("builtins.input", lambda prompt="": "y")

    assert cli.main(argv + ["-C", str(tmp_path)]) == 0

    assert message in capsys.readouterr().out
    assert path.exists()


def test_nothing_to_rename(tmp_path, capsys):
    assert cli.main(["-C", str(tmp_path)]) == 0
    assert "No media files to rename" in capsys.readouterr().out


def test_missing_directory(tmp_path, capsys):
    assert cli.main(["-C", str(tmp_path / "nope")]) == 1
    assert "Not a directory" in capsys.readouterr().out


def test_rename_with_prefix(tmp_path, monkeypatch, capsys, no_ffprobe):
    make_file(tmp_path, "clip.mov", datetime(2021, 7, 4, 13, 5, 9))
    monkeypatch.setattr("builtins.input", lambda prompt="": " Y ")

    assert cli.main(["vac", "-C", str(tmp_path)]) == 0

    assert [p.name for p in tmp_path.iterdir()] == ["vac_2021-07-04 13.05.09.mov"]
    assert "ffprobe not found" in capsys.readouterr().out


def test_inverted_range_warns(tmp_path, capsys):
    assert cli.main(["", "2020-01-01", "2010-01-01", "-C", str(tmp_path)]) == 0
    assert "is after max_date" in capsys.readouterr().out


def test_keyboard_interrupt_at_prompt(tmp_path, monkeypatch, capsys, no_ffprobe):
    make_file(tmp_path, "clip.mp4", datetime(2021, 7, 4, 13, 5, 9))

    def interrupt(prompt=""):
        raise KeyboardInterrupt

    monkeypatch.setattr("builtins.input", interrupt)

    assert cli.main(["-C", str(tmp_path)]) == 1
    assert "Operation cancelled by user." in capsys.readouterr().out
    assert (tmp_path / "clip.mp4").exists()


def test_ffprobe_permission_error_still_renames(tmp_path, monkeypatch, capsys):
    def fake(filename, cmd="ffprobe", **kwargs):
        raise PermissionError(13, "Permission denied", cmd)

    monkeypatch.setattr(probe_module.ffmpeg, "probe", fake)
    make_file(tmp_path, "clip.mp4", datetime(2021, 7, 4, 13, 5, 9))
    monkeypatch.setattr("builtins.input", lambda prompt="": "y")

    assert cli.main(["-C", str(tmp_path)]) == 0

    assert [p.name for p in tmp_path.iterdir()] == ["2021-07-04 13.05.09.mp4"]
    assert "Could not run ffprobe" in capsys.readouterr().out


def test_dash_prefix_after_separator():
    config = cli.parse_config(cli.build_parser().parse_args(["--", "-cam", "2010-01-01"]))
    assert config.prefix == "-cam"
    assert config.min_date == datetime(2010, 1, 1)
