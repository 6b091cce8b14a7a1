# payloads/kakaotalk.py
# =============================================================================
# 💛 KakaoTalk – Plus Friend (Business) oder persönlicher Kontakt
# -----------------------------------------------------------------------------
# Priorität: plusFriendId > kakaoId > phoneNumber
# =============================================================================

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payloads.base import Payload, compact
from payloads.checks import match_pattern, optional_text
from payloads.errors import BadFormat, MissingField
from payloads.normalizers import clean_text, encode_uri_component, strip_separators

_PLUS_FRIEND = re.compile(r"@[A-Za-z0-9_]{3,30}")
_KAKAO_ID = re.compile(r"[A-Za-z0-9_]{4,20}")
_KR_PHONE = re.compile(r"(?:\+?82)?0?10(\d{8})")


@dataclass(frozen=True)
class KakaoTalkFields:
    identifier: str
    identifier_type: str
    account_type: str
    display_name: Optional[str] = None
    message: Optional[str] = None


def normalize_kr_phone(value: str) -> str:
    """010-1234-5678 / +82 10 1234 5678 → 821012345678"""
    cleaned = strip_separators(value)
    match = _KR_PHONE.fullmatch(cleaned)
    if not match:
        raise BadFormat("phoneNumber", "Invalid Korean phone number. Format: +82-10-xxxx-xxxx or 010-xxxx-xxxx")
    return "8210" + match.group(1)


def validate(raw: Mapping[str, Any]) -> KakaoTalkFields:
    plus_friend = clean_text(raw.get("plusFriendId"))
    kakao_id = clean_text(raw.get("kakaoId"))
    phone = clean_text(raw.get("phoneNumber"))

    if plus_friend is not None:
        identifier = match_pattern(
            "plusFriendId", plus_friend, _PLUS_FRIEND,
            "Plus Friend ID must start with @ followed by 3-30 characters (e.g., @businessname)",
        )
        identifier_type, account_type = "plusFriend", "business"
    elif kakao_id is not None:
        identifier = match_pattern(
            "kakaoId", kakao_id, _KAKAO_ID,
            "KakaoTalk ID must be 4-20 alphanumeric characters (underscores allowed)",
        )
        identifier_type, account_type = "kakaoId", "personal"
    elif phone is not None:
        identifier = normalize_kr_phone(phone)
        identifier_type, account_type = "phone", "personal"
    else:
        raise MissingField("plusFriendId", "Either phoneNumber, kakaoId, or plusFriendId is required")

    display_name = optional_text(raw, "displayName", min_len=2, max_len=100)
    message = optional_text(raw, "message", max_len=500)

    return KakaoTalkFields(identifier, identifier_type, account_type, display_name, message)


def build(fields: KakaoTalkFields) -> Payload:
    if fields.identifier_type == "plusFriend":
        # Business-Kanäle bekommen keine vorausgefüllte Nachricht
        url = f"https://pf.kakao.com/{fields.identifier}"
    else:
        url = f"kakaotalk://open/friend?id={fields.identifier}"
        if fields.message:
            url += f"&msg={encode_uri_component(fields.message)}"

    metadata = compact({
        "identifier": fields.identifier,
        "identifierType": fields.identifier_type,
        "accountType": fields.account_type,
        "kakaoUrl": url,
        "displayName": fields.display_name,
        "message": fields.message,
    })
    return Payload("kakaotalk", url, metadata, label=fields.display_name or "KakaoTalk")
