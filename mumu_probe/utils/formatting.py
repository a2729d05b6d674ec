"""
Human-readable sizes and durations for the CLI output.
"""

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(num_bytes: int) -> str:
    """Renders a byte count with one decimal in the largest fitting binary unit."""
    if num_bytes <= 0:
        return "0 B"
    if num_bytes < 1024:
        return f"{num_bytes} B"
    value = float(num_bytes)
    for unit in _SIZE_UNITS[1:]:
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f} {unit}"


def format_duration(seconds: float) -> str:
    """
    Renders an elapsed time. Under a minute keeps tenths of a second
    ('2.4s'); longer spans drop to whole units ('1h 2m 5s'), omitting zeros.
    """
    if seconds < 60:
        return f"{max(seconds, 0.0):.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    return " ".join(
        f"{amount}{suffix}"
        for amount, suffix in ((hours, "h"), (minutes, "m"), (secs, "s"))
        if amount
    )
