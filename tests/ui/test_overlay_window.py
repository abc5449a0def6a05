"""
Smoke tests for OverlayWindow wiring with a mocked media backend.
"""

import pytest
from unittest.mock import Mock

from common.config import Config
from model.telemetry import Format, PlaybackCounters
from services.media import PlaybackState
from ui.debug_overlay.overlay_window import OverlayWindow


@pytest.fixture
def backend():
    backend = Mock()
    backend.get_position.return_value = 1500
    backend.get_format.return_value = Format(id="h264", bitrate=1_000_000, height=480)
    backend.get_playback_counters.return_value = PlaybackCounters(codec_init_count=1)
    backend.get_playback_state.return_value = PlaybackState.STOPPED
    return backend


def make_window(qtbot, tmp_path, backend, extra_ini=""):
    config_path = tmp_path / "config.ini"
    if extra_ini:
        config_path.write_text(extra_ini, encoding="utf-8")
    window = OverlayWindow(Config(str(config_path)), backend=backend)
    qtbot.addWidget(window)
    return window


def test_debug_line_shown_on_launch(qtbot, tmp_path, backend):
    window = make_window(qtbot, tmp_path, backend)

    assert window.debug_label.text() == "ms(1500) id:h264 br:1000000 h:480 bw:? cic(1)crc(0)ofc(0)obc(0)ren(0)sob(0)dob(0)"
    assert window.debug_helper.is_running
    backend.set_volume.assert_called_once_with(50)


def test_start_on_launch_disabled(qtbot, tmp_path, backend):
    window = make_window(qtbot, tmp_path, backend, "[Overlay]\nstart_on_launch = false\n")

    assert window.debug_label.text() == ""
    assert not window.debug_helper.is_running


def test_toggle_debug_line(qtbot, tmp_path, backend):
    window = make_window(qtbot, tmp_path, backend)

    window.debug_action.setChecked(False)
    assert not window.debug_helper.is_running
    assert window.surface.pending_count() == 0
    assert window.debug_label.text() == ""

    window.debug_action.setChecked(True)
    assert window.debug_helper.is_running
    assert window.surface.pending_count() == 1


def test_open_media_autoplays(qtbot, tmp_path, backend):
    window = make_window(qtbot, tmp_path, backend)

    window.open_media("/videos/clip.mp4")

    backend.load.assert_called_once_with("/videos/clip.mp4")
    backend.play.assert_called_once()
    assert window.windowTitle().startswith("clip.mp4")


def test_open_media_without_autoplay(qtbot, tmp_path, backend):
    window = make_window(qtbot, tmp_path, backend)

    window.open_media("/videos/clip.mp4", auto_play=False)

    backend.play.assert_not_called()


def test_toggle_playback(qtbot, tmp_path, backend):
    window = make_window(qtbot, tmp_path, backend)

    window.toggle_playback()
    backend.play.assert_called_once()

    backend.get_playback_state.return_value = PlaybackState.PLAYING
    window.toggle_playback()
    backend.pause.assert_called_once()


def test_close_stops_everything(qtbot, tmp_path, backend):
    window = make_window(qtbot, tmp_path, backend)
    window.show()

    window.close()

    assert not window.debug_helper.is_running
    assert window.surface.pending_count() == 0
    backend.stop.assert_called_once()
    backend.unload.assert_called_once()
