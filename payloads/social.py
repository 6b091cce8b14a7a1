# payloads/social.py
# =============================================================================
# 🌐 Social-Media-Profil QR-Code
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Mapping

from payloads.base import Payload
from payloads.checks import choice, match_pattern, require_text
from payloads.errors import MissingField

PROFILE_URLS = {
    "instagram": "https://instagram.com/{username}",
    "facebook": "https://facebook.com/{username}",
    "twitter": "https://twitter.com/{username}",
    "x": "https://x.com/{username}",
    "linkedin": "https://linkedin.com/in/{username}",
    "tiktok": "https://tiktok.com/@{username}",
    "youtube": "https://youtube.com/@{username}",
    "github": "https://github.com/{username}",
}

_USERNAME = re.compile(r"[^\s/]+")


@dataclass(frozen=True)
class SocialFields:
    platform: str
    username: str


def validate(raw: Mapping[str, Any]) -> SocialFields:
    platform = choice(raw, "platform", PROFILE_URLS)
    if platform is None:
        raise MissingField("platform", "Platform is required")
    username = require_text(raw, "username", max_len=100).lstrip("@")
    match_pattern("username", username, _USERNAME, "Username must not contain spaces or '/'")
    return SocialFields(platform, username)


def build(fields: SocialFields) -> Payload:
    url = PROFILE_URLS[fields.platform].format(username=fields.username)
    metadata = {"platform": fields.platform, "username": fields.username, "profileUrl": url}
    return Payload("social", url, metadata, label=f"{fields.platform} @{fields.username}")
