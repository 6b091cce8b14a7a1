import pytest

from payloads.errors import BadFormat, MissingField, OutOfRange, UnsupportedOption
from payloads.registry import encode


# =============================================================================
# 📶 WiFi
# =============================================================================

def test_wifi_escapes_special_characters():
    payload = encode("wifi", {"ssid": "My;Net", "password": "p:ss"})
    assert payload.canonical == "WIFI:T:WPA;S:My\\;Net;P:p\\:ss;;"
    assert payload.label == "WiFi - My;Net"


def test_wifi_hidden_network():
    payload = encode("wifi", {"ssid": "Home", "password": "secret", "hidden": "true"})
    assert payload.canonical == "WIFI:T:WPA;S:Home;P:secret;H:true;;"


def test_wifi_open_network_drops_password():
    payload = encode("wifi", {"ssid": "Cafe", "encryption": "NOPASS", "password": "egal"})
    assert payload.canonical == "WIFI:T:nopass;S:Cafe;;"


def test_wifi_password_keeps_spaces():
    payload = encode("wifi", {"ssid": "Home", "password": " pass word "})
    assert "P: pass word ;" in payload.canonical


@pytest.mark.parametrize("raw, error, field", [
    ({"password": "x"}, MissingField, "ssid"),
    ({"ssid": "Home", "encryption": "WEP"}, MissingField, "password"),
    ({"ssid": "Home", "encryption": "wpa3", "password": "x"}, UnsupportedOption, "encryption"),
])
def test_wifi_rejections(raw, error, field):
    with pytest.raises(error) as exc:
        encode("wifi", raw)
    assert exc.value.field == field


# =============================================================================
# 👤 vCard
# =============================================================================

def test_vcard_lines():
    payload = encode("vcard", {
        "firstName": "Anna",
        "lastName": "Schmidt",
        "company": "ACME, Inc.",
        "phone": "+49 170 1234567",
        "email": "anna@example.com",
    })
    lines = payload.canonical.split("\n")
    assert lines[:4] == ["BEGIN:VCARD", "VERSION:3.0", "N:Schmidt;Anna;;;", "FN:Anna Schmidt"]
    assert "ORG:ACME\\, Inc." in lines
    assert "TEL;TYPE=cell:+49 170 1234567" in lines
    assert "EMAIL;TYPE=internet:anna@example.com" in lines
    assert lines[-1] == "END:VCARD"
    assert payload.label == "Anna Schmidt"


@pytest.mark.parametrize("raw, error, field", [
    ({"lastName": "Schmidt"}, MissingField, "firstName"),
    ({"firstName": "Anna", "email": "anna(at)example.com"}, BadFormat, "email"),
    ({"firstName": "Anna", "website": "example.com"}, BadFormat, "website"),
])
def test_vcard_rejections(raw, error, field):
    with pytest.raises(error) as exc:
        encode("vcard", raw)
    assert exc.value.field == field


# =============================================================================
# 📧 E-Mail / 💬 SMS
# =============================================================================

def test_email_mailto():
    payload = encode("email", {"email": "info@example.com", "subject": "Hallo Welt", "body": "a&b"})
    assert payload.canonical == "mailto:info@example.com?subject=Hallo%20Welt&body=a%26b"


def test_email_invalid():
    with pytest.raises(BadFormat):
        encode("email", {"email": "info.example.com"})


def test_sms_strips_separators():
    payload = encode("sms", {"phone": "+49 (170) 123-4567", "message": "Hi!"})
    assert payload.canonical == "sms:+491701234567?body=Hi!"


@pytest.mark.parametrize("raw, error", [
    ({"phone": "abc"}, BadFormat),
    ({"phone": "  "}, MissingField),
    ({"phone": "12345", "message": "x" * 1001}, OutOfRange),
])
def test_sms_rejections(raw, error):
    with pytest.raises(error):
        encode("sms", raw)


# =============================================================================
# 📅 Event
# =============================================================================

def test_event_times_are_utc():
    payload = encode("event", {
        "title": "Launch; Party",
        "start": "2025-03-01T18:00:00+01:00",
        "end": "2025-03-01T20:00:00Z",
        "location": "Berlin",
    })
    lines = payload.canonical.split("\n")
    assert "SUMMARY:Launch\\; Party" in lines
    assert "DTSTART:20250301T170000Z" in lines
    assert "DTEND:20250301T200000Z" in lines
    assert "LOCATION:Berlin" in lines
    assert payload.metadata["start"] == "2025-03-01T17:00:00Z"


@pytest.mark.parametrize("raw, error, field", [
    ({"start": "2025-03-01T18:00:00Z", "end": "2025-03-01T20:00:00Z"}, MissingField, "title"),
    ({"title": "X", "start": "morgen", "end": "2025-03-01T20:00:00Z"}, BadFormat, "start"),
    ({"title": "X", "start": "2025-03-01T18:00:00Z"}, MissingField, "end"),
    ({"title": "X", "start": "2025-03-01T18:00:00Z", "end": "2025-03-01T17:00:00Z"}, OutOfRange, "end"),
])
def test_event_rejections(raw, error, field):
    with pytest.raises(error) as exc:
        encode("event", raw)
    assert exc.value.field == field


# =============================================================================
# 🌐 Social
# =============================================================================

@pytest.mark.parametrize("platform, expected", [
    ("Instagram", "https://instagram.com/ouhud"),
    ("tiktok", "https://tiktok.com/@ouhud"),
    ("linkedin", "https://linkedin.com/in/ouhud"),
])
def test_social_profile_urls(platform, expected):
    payload = encode("social", {"platform": platform, "username": "@ouhud"})
    assert payload.canonical == expected
    assert payload.metadata["username"] == "ouhud"


@pytest.mark.parametrize("raw, error, field", [
    ({"username": "ouhud"}, MissingField, "platform"),
    ({"platform": "myspace", "username": "ouhud"}, UnsupportedOption, "platform"),
    ({"platform": "github", "username": "a b"}, BadFormat, "username"),
    ({"platform": "github"}, MissingField, "username"),
])
def test_social_rejections(raw, error, field):
    with pytest.raises(error) as exc:
        encode("social", raw)
    assert exc.value.field == field
