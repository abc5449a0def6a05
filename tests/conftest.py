import os
import sys
import pytest

# Widgets must not need a display server
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure src directory is importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
SRC_DIR = os.path.join(PROJECT_ROOT, 'src')
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

# Add tests directory to path for test utilities
TESTS_DIR = os.path.join(PROJECT_ROOT, 'tests')
if TESTS_DIR not in sys.path:
    sys.path.append(TESTS_DIR)

from model.telemetry import Format, NO_ESTIMATE
from test_utils.fake_surface import FakeSurface
from test_utils.provider_stub import StubProvider, StubBandwidthMeter, StubCodecCounters


@pytest.fixture
def fake_surface():
    """Display surface driven by a fake millisecond clock."""
    return FakeSurface()


@pytest.fixture
def idle_provider():
    """Provider with nothing loaded: position 0, every optional value absent."""
    return StubProvider(position_ms=0)


@pytest.fixture
def playing_provider():
    """
    Provider in the middle of adaptive playback.

    Provides:
        - position 12345 ms
        - 720p format at 2.5 Mbit/s
        - 8 Mbit/s bandwidth estimate
        - codec counters "rb:10 db:2"
    """
    return StubProvider(
        position_ms=12345,
        format=Format(id="video/1", bitrate=2_500_000, height=720),
        bandwidth_meter=StubBandwidthMeter(8_000_000),
        codec_counters=StubCodecCounters("rb:10 db:2"),
    )


@pytest.fixture
def no_estimate_meter():
    return StubBandwidthMeter(NO_ESTIMATE)
