# utils/qr_schema.py
"""
Feldkatalog pro QR-Code-Typ (für GET /qr/types und Formular-Clients).
Die eigentlichen Regeln stecken in den Validatoren unter payloads/.
"""

from typing import Dict, Any, List


# ✅ Felder pro QR-Typ
# "one_of": mindestens eines der Felder muss gesetzt sein (erstes gewinnt)
QR_SCHEMAS: Dict[str, Dict[str, Any]] = {
    "vietqr": {
        "label": "VietQR",
        "required": ["bankCode", "accountNumber", "accountName"],
        "optional": ["amount", "description", "template"],
    },
    "wechat-pay": {
        "label": "WeChat Pay",
        "required": ["merchantId"],
        "optional": ["currency", "amount", "description", "orderId"],
    },
    "zalo": {
        "label": "Zalo",
        "one_of": ["phoneNumber", "zaloId"],
        "optional": ["displayName", "message"],
    },
    "kakaotalk": {
        "label": "KakaoTalk",
        "one_of": ["plusFriendId", "kakaoId", "phoneNumber"],
        "optional": ["displayName", "message"],
    },
    "line": {
        "label": "LINE",
        "one_of": ["officialAccountId", "lineId", "phoneNumber"],
        "optional": ["displayName", "message"],
    },
    "app-store": {
        "label": "App Store",
        "required": ["appName"],
        "one_of": ["iosAppId", "androidPackageName"],
        "optional": ["platform", "fallbackUrl"],
    },
    "pdf": {
        "label": "PDF",
        "required": ["url"],
        "optional": ["title", "download", "fileSize"],
    },
    "video": {
        "label": "Video",
        "required": ["videoUrl"],
        "optional": ["videoTitle", "platform", "autoplay", "startTime"],
    },
    "audio": {
        "label": "Audio",
        "required": ["audioUrl"],
        "optional": ["audioTitle", "artistName", "platform", "audioType", "duration"],
    },
    "multi-url": {
        "label": "Multi-URL",
        "required": ["urls"],
        "optional": ["title", "routingStrategy", "landingPageUrl"],
    },
    "business-page": {
        "label": "Business Page",
        "required": ["businessName"],
        "one_of": ["landingPageUrl", "websiteUrl"],
        "optional": [
            "description", "email", "phone", "address", "businessHours",
            "socialLinks", "categories", "logo", "coverImage",
        ],
    },
    "coupon": {
        "label": "Coupon",
        "required": ["couponCode", "title"],
        "optional": [
            "description", "discountType", "discountValue", "currency", "validFrom",
            "validUntil", "minimumPurchase", "maxUses", "terms", "redemptionUrl", "businessName",
        ],
    },
    "feedback-form": {
        "label": "Feedback Form",
        "required": ["formTitle"],
        "one_of": ["formUrl", "submissionUrl"],
        "optional": [
            "formDescription", "questions", "businessName", "ratingType",
            "collectEmail", "collectName", "thankYouMessage",
        ],
    },
    "wifi": {
        "label": "WiFi",
        "required": ["ssid"],
        "optional": ["encryption", "password", "hidden"],
    },
    "vcard": {
        "label": "vCard",
        "required": ["firstName"],
        "optional": ["lastName", "phone", "email", "company", "title", "address", "website", "note"],
    },
    "event": {
        "label": "Event",
        "required": ["title", "start", "end"],
        "optional": ["location", "description"],
    },
    "email": {
        "label": "E-Mail",
        "required": ["email"],
        "optional": ["subject", "body"],
    },
    "sms": {
        "label": "SMS",
        "required": ["phone"],
        "optional": ["message"],
    },
    "social": {
        "label": "Social",
        "required": ["platform", "username"],
    },
}


def describe_type(qr_type: str) -> Dict[str, Any]:
    schema = QR_SCHEMAS.get(qr_type, {})
    return {
        "type": qr_type,
        "label": schema.get("label", qr_type),
        "required": schema.get("required", []),
        "one_of": schema.get("one_of", []),
        "optional": schema.get("optional", []),
    }


def describe_all(qr_types: List[str]) -> List[Dict[str, Any]]:
    return [describe_type(qr_type) for qr_type in qr_types]
