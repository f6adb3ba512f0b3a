import re

# Loose match first: anything starting at "BV" up to "?", "/" or the end.
_LOOSE_RE = re.compile(r"(?=BV).*?(?=[?/]|\Z)")
_QUERY_RE = re.compile(r"bvid=(BV[a-zA-Z0-9]+)")
_PATH_RE = re.compile(r"/video/(BV[a-zA-Z0-9]+)")


def extract_bvid(url):
    """Return the BV identifier found in url, or None."""
    if not url:
        return None

    match = _LOOSE_RE.search(url)
    if match:
        return match.group(0)

    match = _QUERY_RE.search(url)
    if match:
        return match.group(1)

    match = _PATH_RE.search(url)
    if match:
        return match.group(1)

    return None
