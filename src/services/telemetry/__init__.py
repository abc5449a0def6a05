"""
Playback telemetry sampling and formatting.

Provides the provider protocols consumed by the debug overlay and the pure
formatter that turns a snapshot into the one-line debug text.
"""

from services.telemetry.formatter import format_telemetry
from services.telemetry.provider import (
    BackendTelemetryProvider,
    BandwidthMeter,
    CodecCounters,
    TelemetryProvider,
    take_snapshot,
)

__all__ = [
    "BackendTelemetryProvider",
    "BandwidthMeter",
    "CodecCounters",
    "TelemetryProvider",
    "format_telemetry",
    "take_snapshot",
]
