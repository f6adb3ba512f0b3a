UNKNOWN = "unknown"

QUALITY_LABELS = {
    120: "4K Ultra",
    116: "1080P60 High Frame Rate",
    112: "1080P+ High Bitrate",
    80: "1080P HD",
    74: "720P60 High Frame Rate",
    64: "720P HD",
    32: "480P Clear",
    16: "360P Smooth",
}


def format_duration(seconds):
    """Format seconds as H:MM:SS or M:SS."""
    if not seconds:
        return UNKNOWN
    seconds = int(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def quality_label(code):
    return QUALITY_LABELS.get(code, f"{code}P")
