"""Formatting of telemetry snapshots into the single-line debug text.

Output grammar (four space-separated fields, always three separators):

    ms(<positionMs>) <quality> <bandwidth> <codec>

The codec field may be empty, leaving a trailing space. Downstream tools split
on whitespace, so the layout must not change.
"""

from typing import Optional

from model.telemetry import NO_ESTIMATE, Format, TelemetrySnapshot

UNKNOWN_QUALITY = "id:? br:? h:?"
UNKNOWN_BANDWIDTH = "bw:?"


def format_telemetry(snapshot: TelemetrySnapshot) -> str:
    """Render a snapshot as one debug line. Pure and locale-independent."""
    return " ".join(
        (
            format_position(snapshot.position_ms),
            format_quality(snapshot.format),
            format_bandwidth(snapshot.bandwidth_estimate),
            format_codec_counters(snapshot.codec_debug),
        )
    )


def format_position(position_ms: int) -> str:
    return f"ms({int(position_ms)})"


def format_quality(fmt: Optional[Format]) -> str:
    if fmt is None:
        return UNKNOWN_QUALITY
    return f"id:{fmt.id} br:{int(fmt.bitrate)} h:{int(fmt.height)}"


def format_bandwidth(estimate: Optional[int]) -> str:
    """
    Format a bandwidth estimate in kilobits per second.

    Args:
        estimate: Bits per second, NO_ESTIMATE, or None when there is no meter

    Returns:
        "bw:?" without an estimate, else "bw:<kbps>" using integer division
        that truncates toward zero (negative estimates pass through)
    """
    if estimate is None or estimate == NO_ESTIMATE:
        return UNKNOWN_BANDWIDTH
    estimate = int(estimate)
    kbps = abs(estimate) // 1000
    return f"bw:{kbps if estimate >= 0 else -kbps}"


def format_codec_counters(debug_string: Optional[str]) -> str:
    return "" if debug_string is None else debug_string
