"""Turn a BV identifier into a directly playable CDN address."""

import logging
from dataclasses import dataclass
from enum import Enum

from bilibili import FetchError
from formatting import format_duration, quality_label

logger = logging.getLogger(__name__)

PREFERRED_QUALITY = 116
FALLBACK_QUALITY = 80
DEFAULT_TITLE = "unknown title"


class ErrorKind(Enum):
    UPSTREAM_INFO = ("failed to get video info", 500)
    UPSTREAM_PLAYBACK = ("failed to get play url", 500)
    NO_PLAYABLE_SOURCE = ("no playable CDN url found", 404)
    TRANSPORT = ("upstream request failed", 502)

    def __init__(self, error, status):
        self.error = error
        self.status = status


class ResolutionError(Exception):
    def __init__(self, kind, message=None):
        super().__init__(message or kind.error)
        self.kind = kind
        self.message = message

    def to_dict(self):
        body = {"error": self.kind.error}
        if self.message is not None:
            body["message"] = self.message
        return body


@dataclass(frozen=True)
class VideoMetadata:
    title: str = DEFAULT_TITLE
    duration: int = 0


@dataclass(frozen=True)
class PlaybackResult:
    cdn_url: str
    quality: str
    duration: str
    bvid: str
    title: str = DEFAULT_TITLE

    def to_dict(self):
        return {
            "cdnUrl": self.cdn_url,
            "title": self.title,
            "duration": self.duration,
            "quality": self.quality,
            "bvid": self.bvid,
        }


def _first_cid(client, bvid):
    payload = client.pagelist(bvid)
    pages = payload.get("data")
    if payload.get("code") != 0 or not isinstance(pages, list) or not pages:
        raise ResolutionError(
            ErrorKind.UPSTREAM_INFO,
            payload.get("message") or "video does not exist or has been removed",
        )

    first = pages[0]
    cid = first.get("cid") if isinstance(first, dict) else None
    if cid is None:
        raise ResolutionError(ErrorKind.UPSTREAM_INFO, "page list entry has no cid")
    return cid


def _video_metadata(client, bvid):
    """View info is optional; any failure falls back to the defaults."""
    try:
        payload = client.view(bvid)
    except FetchError as e:
        logger.warning(f"View info for {bvid} unavailable: {e}")
        return VideoMetadata()

    data = payload.get("data")
    if payload.get("code") != 0 or not isinstance(data, dict):
        logger.warning(f"View info for {bvid} returned code {payload.get('code')}: {payload.get('message')}")
        return VideoMetadata()

    duration = data.get("duration")
    if not isinstance(duration, (int, float)) or duration < 0:
        duration = 0
    return VideoMetadata(title=data.get("title") or DEFAULT_TITLE, duration=duration)


def select_stream(data):
    """Pick (cdn_url, quality_code) from a playurl data block, or None.

    Direct files (durl) win over the first DASH video track. The quality
    always comes from the response, not from the requested qn.
    """
    if not isinstance(data, dict):
        return None

    durl = data.get("durl")
    if isinstance(durl, list) and durl and isinstance(durl[0], dict):
        return durl[0].get("url"), data.get("quality") or FALLBACK_QUALITY

    dash = data.get("dash")
    videos = dash.get("video") if isinstance(dash, dict) else None
    if isinstance(videos, list) and videos and isinstance(videos[0], dict):
        track = videos[0]
        return track.get("baseUrl") or track.get("base_url"), track.get("id") or FALLBACK_QUALITY

    return None


def resolve(bvid, original_url, client):
    """Run pagelist -> view -> playurl for bvid and build a PlaybackResult.

    Raises ResolutionError on every failure except a missing view info.
    """
    try:
        cid = _first_cid(client, bvid)
        logger.info(f"Got CID {cid} for {bvid}")

        metadata = _video_metadata(client, bvid)

        payload = client.playurl(bvid, cid, PREFERRED_QUALITY, original_url)
    except FetchError as e:
        raise ResolutionError(ErrorKind.TRANSPORT, str(e)) from e

    if payload.get("code") != 0:
        raise ResolutionError(
            ErrorKind.UPSTREAM_PLAYBACK,
            payload.get("message") or "login may be required or the video is access-restricted",
        )

    stream = select_stream(payload.get("data"))
    if stream is None or not stream[0]:
        raise ResolutionError(ErrorKind.NO_PLAYABLE_SOURCE)

    cdn_url, quality = stream
    logger.info(f"Resolved {bvid} to {cdn_url}")
    return PlaybackResult(
        cdn_url=cdn_url,
        quality=quality_label(quality),
        duration=format_duration(metadata.duration),
        bvid=bvid,
        title=metadata.title,
    )
