from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from payloads.base import Payload
from payloads.errors import BadFormat, MutuallyExclusive, OutOfRange, UnsupportedOption
from payloads.normalizers import (
    clean_text,
    digits_only,
    fold,
    format_amount,
    json_number,
    parse_bool,
    parse_datetime,
    parse_decimal,
    plain_amount,
    strip_separators,
    upper_code,
)
from payloads.reference import BANK, LINE_COUNTRY, ReferenceTableLoader
from payloads.registry import CODECS, QRType, check_exhaustive, encode, resolve_type
from utils.qr_schema import QR_SCHEMAS, describe_type

VIETQR = {"bankCode": "VCB", "accountNumber": "123456789", "accountName": "NGUYEN VAN A"}


# =============================================================================
# 🧭 Registry
# =============================================================================

def test_every_type_has_a_codec():
    assert len(QRType) == 19
    assert set(CODECS) == set(QRType)


def test_missing_codec_fails_loudly():
    partial = {t: c for t, c in CODECS.items() if t is not QRType.SOCIAL}
    with pytest.raises(RuntimeError) as exc:
        check_exhaustive(partial)
    assert "social" in str(exc.value)


def test_type_id_is_normalized():
    assert resolve_type("  VietQR ") is QRType.VIETQR
    assert encode(" WECHAT-PAY", {"merchantId": "1234567890"}).qr_type == "wechat-pay"


@pytest.mark.parametrize("type_id", ["bitcoin", "", None])
def test_unknown_type(type_id):
    with pytest.raises(UnsupportedOption) as exc:
        encode(type_id, {})
    assert exc.value.field == "type"


def test_data_must_be_an_object():
    with pytest.raises(BadFormat) as exc:
        encode("vietqr", ["VCB"])
    assert exc.value.field == "data"


def test_encode_is_deterministic():
    first = encode("vietqr", {**VIETQR, "amount": 100000})
    second = encode("vietqr", {**VIETQR, "amount": 100000})
    assert first.canonical == second.canonical
    assert dict(first.metadata) == dict(second.metadata)


def test_distinct_amounts_give_distinct_payloads():
    low = encode("vietqr", {**VIETQR, "amount": 100000})
    high = encode("vietqr", {**VIETQR, "amount": 200000})
    assert low.canonical != high.canonical


def test_payload_is_immutable():
    payload = encode("sms", {"phone": "12345"})
    with pytest.raises(TypeError):
        payload.metadata["phone"] = "999"
    with pytest.raises(FrozenInstanceError):
        payload.canonical = "sms:999"


def test_payload_as_dict():
    payload = Payload("sms", "sms:12345", {"phone": "12345"}, label="SMS 12345")
    assert payload.as_dict() == {
        "type": "sms",
        "qr_string": "sms:12345",
        "metadata": {"phone": "12345"},
        "label": "SMS 12345",
    }


def test_error_to_dict():
    error = MutuallyExclusive("iosAppId", "nur eine Plattform")
    assert error.to_dict() == {
        "kind": "MutuallyExclusive",
        "field": "iosAppId",
        "reason": "nur eine Plattform",
    }
    assert isinstance(OutOfRange("amount", "x"), ValueError)


# =============================================================================
# 🧹 Normalisierer
# =============================================================================

@pytest.mark.parametrize("func, value", [
    (clean_text, "  hallo  "),
    (strip_separators, "+84 (912) 345-678"),
    (digits_only, "12-34 56"),
    (upper_code, " vcb "),
    (fold, " PRINT "),
])
def test_normalizers_are_idempotent(func, value):
    once = func(value)
    assert func(once) == once


def test_clean_text_blank_is_none():
    assert clean_text("   ") is None
    assert clean_text(None) is None
    assert clean_text(0) == "0"


@pytest.mark.parametrize("value", [True, "nan", "inf", float("inf"), "zwölf"])
def test_parse_decimal_rejects(value):
    with pytest.raises(ValueError):
        parse_decimal(value)


def test_parse_bool_rejects_unknown_words():
    assert parse_bool("Yes") is True
    assert parse_bool("off") is False
    with pytest.raises(ValueError):
        parse_bool("vielleicht")


def test_parse_datetime_naive_is_utc():
    assert parse_datetime("2025-03-01T18:00:00") == datetime(2025, 3, 1, 18, tzinfo=timezone.utc)


def test_amount_formatting():
    assert plain_amount(Decimal("100000")) == "100000"
    assert plain_amount(Decimal("12.50")) == "12.5"
    assert format_amount(Decimal("100000"), "VND") == "100.000 ₫"
    assert format_amount(Decimal("1234.5"), "CNY") == "¥1,234.50"


# =============================================================================
# 📚 Referenzdaten
# =============================================================================

def test_builtin_reference_tables():
    tables = ReferenceTableLoader().load()
    assert tables.lookup(BANK, "vcb").identifier == "970436"
    assert tables.lookup(LINE_COUNTRY, "886").identifier == "TW"
    assert tables.lookup(BANK, "nope") is None


def test_reference_tables_are_read_only():
    tables = ReferenceTableLoader().load()
    with pytest.raises(TypeError):
        tables.table(BANK)["NEW"] = None


def test_extra_banks_must_be_a_list(tmp_path):
    extra = tmp_path / "banks.json"
    extra.write_text('{"code": "XYZ"}')
    with pytest.raises(ValueError):
        ReferenceTableLoader(str(extra)).load()


def test_payload_is_hashable():
    """Payloads taugen als Cache-Schlüssel."""
    first = encode("vietqr", {**VIETQR, "amount": 100000})
    second = encode("vietqr", {**VIETQR, "amount": 100000})
    cache = {first: "gerendert"}
    assert hash(first) == hash(second)
    assert cache[second] == "gerendert"


def test_field_catalogue_covers_every_type():
    """GET /qr/types darf keinen registrierten Typ auslassen."""
    assert set(QR_SCHEMAS) == {qr_type.value for qr_type in QRType}
    for qr_type in QRType:
        entry = describe_type(qr_type.value)
        assert entry["required"] or entry["one_of"], qr_type.value


def test_json_number():
    assert json_number(Decimal("100000")) == 100000
    assert isinstance(json_number(Decimal("100000.00")), int)
    assert json_number(Decimal("12.35")) == 12.35
