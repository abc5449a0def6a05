"""Tests for the debugoverlay command-line entry point."""

import debugoverlay


def test_parse_defaults():
    args = debugoverlay.parse_arguments([])

    assert args.media is None
    assert args.config is None
    assert args.log_level is None
    assert not args.no_autoplay


def test_parse_all_options():
    args = debugoverlay.parse_arguments(["movie.mp4", "--config", "c.ini", "--log-level", "DEBUG", "--no-autoplay"])

    assert args.media == "movie.mp4"
    assert args.config == "c.ini"
    assert args.log_level == "DEBUG"
    assert args.no_autoplay


def test_version_exits_zero(capsys):
    assert debugoverlay.main(["--version"]) == 0

    out = capsys.readouterr().out
    assert "Playback Debug Overlay" in out
    assert "PySide6" in out


def test_missing_media_exits_two(tmp_path, capsys):
    missing = tmp_path / "nope.mp4"

    assert debugoverlay.main([str(missing)]) == 2
    assert "media file not found" in capsys.readouterr().err
