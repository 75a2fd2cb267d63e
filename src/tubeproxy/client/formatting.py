"""Human-readable durations and sizes for the picker."""

SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_duration(seconds) -> str:
    """Format duration like YouTube (M:SS or H:MM:SS)."""
    total_seconds = int(float(seconds or 0))
    if total_seconds < 0:
        total_seconds = 0
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_file_size(size_bytes) -> str:
    """Convert bytes into a 1024-based size with one decimal, or "" if unknown."""
    if not size_bytes:
        return ""
    try:
        size = float(int(size_bytes))
    except (TypeError, ValueError):
        return ""
    idx = 0
    while size >= 1024.0 and idx < len(SIZE_UNITS) - 1:
        size /= 1024.0
        idx += 1
    return f"{size:.1f} {SIZE_UNITS[idx]}"
