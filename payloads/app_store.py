# payloads/app_store.py
# =============================================================================
# 📱 App Store QR – Apple App Store / Google Play Direktlink
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payloads.base import Payload, compact
from payloads.checks import choice, match_pattern, optional_url, require_text
from payloads.errors import MissingField
from payloads.normalizers import clean_text, strip_separators

PLATFORMS = ("auto", "ios", "android")
DUAL_NOTE = (
    "QR code points to iOS App Store. For Android users, provide separate QR or use smart routing."
)

_IOS_APP_ID = re.compile(r"\d{9,10}")
_ANDROID_PACKAGE = re.compile(r"[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)+")


@dataclass(frozen=True)
class AppStoreFields:
    app_name: str
    ios_app_id: Optional[str] = None
    android_package_name: Optional[str] = None
    platform: str = "auto"
    fallback_url: Optional[str] = None


def ios_url(app_id: str) -> str:
    return f"https://apps.apple.com/app/id{app_id}"


def android_url(package_name: str) -> str:
    return f"https://play.google.com/store/apps/details?id={package_name}"


def validate(raw: Mapping[str, Any]) -> AppStoreFields:
    app_name = require_text(raw, "appName", min_len=2, max_len=100)

    ios_raw = clean_text(raw.get("iosAppId"))
    android_raw = clean_text(raw.get("androidPackageName"))
    if ios_raw is None and android_raw is None:
        raise MissingField(
            "iosAppId", "At least one app identifier required (iosAppId or androidPackageName)"
        )

    ios_app_id = None
    if ios_raw is not None:
        ios_app_id = match_pattern(
            "iosAppId", strip_separators(ios_raw), _IOS_APP_ID, "Apple App ID must be 9-10 digits"
        )

    android_package = None
    if android_raw is not None:
        android_package = match_pattern(
            "androidPackageName", android_raw, _ANDROID_PACKAGE,
            "Invalid Google package name (format: com.company.app)",
        )

    platform = choice(raw, "platform", PLATFORMS, default="auto")
    if platform == "ios" and ios_app_id is None:
        raise MissingField("iosAppId", "iOS platform selected but no iosAppId provided")
    if platform == "android" and android_package is None:
        raise MissingField(
            "androidPackageName", "Android platform selected but no androidPackageName provided"
        )

    fallback_url = optional_url(raw, "fallbackUrl")
    return AppStoreFields(app_name, ios_app_id, android_package, platform, fallback_url)


def build(fields: AppStoreFields) -> Payload:
    ios = ios_url(fields.ios_app_id) if fields.ios_app_id else None
    android = android_url(fields.android_package_name) if fields.android_package_name else None

    if fields.platform == "ios":
        url, selected = ios, "ios"
    elif fields.platform == "android":
        url, selected = android, "android"
    elif ios and android:
        url, selected = ios, "dual"
    elif ios:
        url, selected = ios, "ios"
    else:
        url, selected = android, "android"

    metadata = compact({
        "appName": fields.app_name,
        "platform": selected,
        "iosUrl": ios,
        "androidUrl": android,
        "fallbackUrl": fields.fallback_url,
        "note": DUAL_NOTE if selected == "dual" else None,
    })
    return Payload("app-store", url, metadata, label=fields.app_name)
