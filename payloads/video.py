# payloads/video.py
# =============================================================================
# 🎬 Video QR – YouTube, Vimeo, Social oder direkte Videodatei
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from payloads.base import Payload, compact
from payloads.checks import choice, flag, optional_int, optional_text, require_url

PLATFORMS = ("youtube", "vimeo", "facebook", "instagram", "tiktok", "direct", "other")

_HOSTS = (
    ("youtube", ("youtube.com", "youtu.be")),
    ("vimeo", ("vimeo.com",)),
    ("facebook", ("facebook.com", "fb.watch")),
    ("instagram", ("instagram.com",)),
    ("tiktok", ("tiktok.com",)),
)
_VIDEO_FILE = re.compile(r"\.(mp4|mov|avi|wmv|flv|webm)$", re.IGNORECASE)


@dataclass(frozen=True)
class VideoFields:
    video_url: str
    platform: str
    video_title: Optional[str] = None
    autoplay: bool = False
    start_time: Optional[int] = None


def detect_platform(url: str) -> str:
    parts = urlsplit(url)
    host = parts.netloc.lower()
    for platform, domains in _HOSTS:
        if any(host == d or host.endswith("." + d) for d in domains):
            return platform
    if _VIDEO_FILE.search(parts.path):
        return "direct"
    return "other"


def validate(raw: Mapping[str, Any]) -> VideoFields:
    video_url = require_url(raw, "videoUrl")
    video_title = optional_text(raw, "videoTitle", min_len=2, max_len=200)
    platform = choice(raw, "platform", PLATFORMS) or detect_platform(video_url)
    autoplay = flag(raw, "autoplay")
    start_time = optional_int(raw, "startTime", minimum=0)
    return VideoFields(video_url, platform, video_title, autoplay, start_time)


def with_query(url: str, updates: Mapping[str, str]) -> str:
    """Setzt/ersetzt Query-Parameter, Reihenfolge bestehender Parameter bleibt."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k not in updates]
    query += list(updates.items())
    return urlunsplit(parts._replace(query=urlencode(query)))


def build(fields: VideoFields) -> Payload:
    url = fields.video_url
    if fields.platform == "youtube":
        updates = {}
        if fields.autoplay:
            updates["autoplay"] = "1"
        if fields.start_time:
            updates["t"] = str(fields.start_time)
        if updates:
            url = with_query(url, updates)

    metadata = compact({
        "videoUrl": fields.video_url,
        "videoTitle": fields.video_title,
        "platform": fields.platform,
        "autoplay": fields.autoplay,
        "startTime": fields.start_time,
    })
    return Payload("video", url, metadata, label=fields.video_title or "Video")
