"""
Telemetry provider interface.

A provider is a read-only view over current playback telemetry. Each accessor
returns the freshest value its collaborator has; nothing is cached here.
"""

import logging
from typing import Optional, Protocol

from model.telemetry import Format, TelemetrySnapshot

logger = logging.getLogger(__name__)


class BandwidthMeter(Protocol):
    def get_bitrate_estimate(self) -> int:
        """
        Get the current bandwidth estimate.

        Returns:
            Estimate in bits per second, or NO_ESTIMATE if none is available yet
        """
        ...


class CodecCounters(Protocol):
    def get_debug_string(self) -> str:
        """Get a pre-formatted, single-line summary of the counters."""
        ...


class TelemetryProvider(Protocol):
    """
    Protocol for anything that can be sampled by the debug overlay.

    All accessors are called on the GUI thread and must not block.
    """

    def get_current_position(self) -> int:
        """Current playback position in milliseconds."""
        ...

    def get_format(self) -> Optional[Format]:
        """Format of the selected track, or None."""
        ...

    def get_bandwidth_meter(self) -> Optional[BandwidthMeter]:
        """Bandwidth meter, or None if the source has none."""
        ...

    def get_codec_counters(self) -> Optional[CodecCounters]:
        """Codec counters, or None if not available."""
        ...


def take_snapshot(provider: TelemetryProvider) -> TelemetrySnapshot:
    """
    Read every accessor of the provider once.

    Errors raised by the provider are not caught.
    """
    meter = provider.get_bandwidth_meter()
    counters = provider.get_codec_counters()
    return TelemetrySnapshot(
        position_ms=provider.get_current_position(),
        format=provider.get_format(),
        bandwidth_estimate=meter.get_bitrate_estimate() if meter is not None else None,
        codec_debug=counters.get_debug_string() if counters is not None else None,
    )


class BackendTelemetryProvider:
    """
    TelemetryProvider backed by a MediaBackend.

    Local playback has no bandwidth meter; pass one in when the backend
    streams from the network.
    """

    def __init__(self, backend, bandwidth_meter: Optional[BandwidthMeter] = None):
        self._backend = backend
        self._bandwidth_meter = bandwidth_meter

    def get_current_position(self) -> int:
        return self._backend.get_position()

    def get_format(self) -> Optional[Format]:
        return self._backend.get_format()

    def get_bandwidth_meter(self) -> Optional[BandwidthMeter]:
        return self._bandwidth_meter

    def set_bandwidth_meter(self, meter: Optional[BandwidthMeter]) -> None:
        logger.debug(f"Bandwidth meter set: {type(meter).__name__ if meter else None}")
        self._bandwidth_meter = meter

    def get_codec_counters(self) -> Optional[CodecCounters]:
        return self._backend.get_playback_counters()
