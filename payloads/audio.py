# payloads/audio.py
# =============================================================================
# 🎵 Audio QR – Streaming-Dienste, Podcasts, direkte Audiodateien
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from payloads.base import Payload, compact
from payloads.checks import choice, optional_int, optional_text, require_url

PLATFORMS = (
    "spotify", "apple-music", "soundcloud", "youtube-music", "deezer", "tidal", "direct", "other",
)
AUDIO_TYPES = ("track", "album", "playlist", "podcast", "artist")

_HOSTS = (
    ("spotify", ("spotify.com",)),
    ("apple-music", ("music.apple.com", "itunes.apple.com")),
    ("soundcloud", ("soundcloud.com",)),
    ("youtube-music", ("music.youtube.com",)),
    ("deezer", ("deezer.com",)),
    ("tidal", ("tidal.com",)),
)
_AUDIO_FILE = re.compile(r"\.(mp3|wav|ogg|m4a|flac|aac|wma)$", re.IGNORECASE)


@dataclass(frozen=True)
class AudioFields:
    audio_url: str
    platform: str
    audio_title: Optional[str] = None
    artist_name: Optional[str] = None
    audio_type: Optional[str] = None
    duration: Optional[int] = None


def detect_platform(url: str) -> str:
    parts = urlsplit(url)
    host = parts.netloc.lower()
    for platform, domains in _HOSTS:
        if any(host == d or host.endswith("." + d) for d in domains):
            return platform
    if _AUDIO_FILE.search(parts.path):
        return "direct"
    return "other"


def validate(raw: Mapping[str, Any]) -> AudioFields:
    audio_url = require_url(raw, "audioUrl")
    audio_title = optional_text(raw, "audioTitle", min_len=2, max_len=200)
    artist_name = optional_text(raw, "artistName", min_len=2, max_len=100)
    platform = choice(raw, "platform", PLATFORMS) or detect_platform(audio_url)
    audio_type = choice(raw, "audioType", AUDIO_TYPES)
    duration = optional_int(raw, "duration", minimum=1)
    return AudioFields(audio_url, platform, audio_title, artist_name, audio_type, duration)


def build(fields: AudioFields) -> Payload:
    metadata = compact({
        "audioUrl": fields.audio_url,
        "audioTitle": fields.audio_title,
        "artistName": fields.artist_name,
        "platform": fields.platform,
        "audioType": fields.audio_type,
        "duration": fields.duration,
    })
    label = fields.audio_title or "Audio"
    if fields.audio_title and fields.artist_name:
        label = f"{fields.audio_title} - {fields.artist_name}"
    return Payload("audio", fields.audio_url, metadata, label=label)
