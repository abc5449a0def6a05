from dataclasses import dataclass
from typing import Optional

# Returned by a bandwidth meter that has not produced an estimate yet
NO_ESTIMATE = -1


@dataclass(frozen=True)
class Format:
    """Quality of the currently selected track."""

    id: str
    bitrate: int  # bits per second
    height: int  # pixels, 0 for audio-only media


@dataclass(frozen=True)
class TelemetrySnapshot:
    """
    Telemetry values read from a provider during a single tick.

    Every field has its own "absent" value:
        format: None when no format is selected
        bandwidth_estimate: None when there is no meter, NO_ESTIMATE when the
            meter has no estimate yet
        codec_debug: None when there are no codec counters
    """

    position_ms: int
    format: Optional[Format] = None
    bandwidth_estimate: Optional[int] = None
    codec_debug: Optional[str] = None


@dataclass
class PlaybackCounters:
    """
    Event counters kept by a media backend while it plays a source.

    Counters only ever grow; call reset() when a new source is loaded.
    """

    codec_init_count: int = 0
    codec_release_count: int = 0
    output_format_changed_count: int = 0
    output_buffers_changed_count: int = 0
    rendered_output_buffer_count: int = 0
    skipped_output_buffer_count: int = 0
    dropped_output_buffer_count: int = 0

    def reset(self) -> None:
        self.codec_init_count = 0
        self.codec_release_count = 0
        self.output_format_changed_count = 0
        self.output_buffers_changed_count = 0
        self.rendered_output_buffer_count = 0
        self.skipped_output_buffer_count = 0
        self.dropped_output_buffer_count = 0

    def get_debug_string(self) -> str:
        return (
            f"cic({self.codec_init_count})"
            f"crc({self.codec_release_count})"
            f"ofc({self.output_format_changed_count})"
            f"obc({self.output_buffers_changed_count})"
            f"ren({self.rendered_output_buffer_count})"
            f"sob({self.skipped_output_buffer_count})"
            f"dob({self.dropped_output_buffer_count})"
        )
