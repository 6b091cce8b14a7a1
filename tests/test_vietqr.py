import json
from decimal import Decimal

import pytest

import settings
from payloads.errors import BadFormat, MissingField, OutOfRange, UnsupportedOption
from payloads.registry import encode

BASE = {"bankCode": "vcb", "accountNumber": "123 456 789", "accountName": "NGUYEN VAN A"}


def test_vietqr_minimal():
    """Minimaler VietQR: Bankcode wird großgeschrieben, Kontonummer bereinigt."""
    payload = encode("vietqr", BASE)
    assert "VCB-123456789" in payload.canonical
    assert payload.canonical == (
        "https://img.vietqr.io/image/VCB-123456789-compact.jpg?accountName=NGUYEN+VAN+A"
    )
    assert payload.metadata["bankCode"] == "VCB"
    assert payload.metadata["bankName"] == "Vietcombank"
    assert payload.metadata["bankBin"] == "970436"
    assert payload.metadata["accountNumber"] == "123456789"
    assert "amount" not in payload.metadata
    assert payload.label == "VietQR - Vietcombank"


def test_vietqr_optional_fields_in_fixed_order():
    payload = encode("vietqr", {
        **BASE,
        "amount": 100000,
        "description": "Thanh toan don hang",
        "template": "PRINT",
    })
    assert payload.canonical == (
        "https://img.vietqr.io/image/VCB-123456789-print.jpg"
        "?accountName=NGUYEN+VAN+A&amount=100000&addInfo=Thanh+toan+don+hang"
    )
    assert payload.metadata["amount"] == Decimal("100000")
    assert payload.metadata["formattedAmount"] == "100.000 ₫"
    assert payload.metadata["template"] == "print"


def test_vietqr_amount_ceiling():
    with pytest.raises(OutOfRange) as exc:
        encode("vietqr", {**BASE, "amount": 600000000})
    assert exc.value.field == "amount"
    assert "500,000,000" in exc.value.reason


def test_vietqr_amount_upper_bound_is_inclusive():
    payload = encode("vietqr", {**BASE, "amount": "500000000"})
    assert "amount=500000000" in payload.canonical


@pytest.mark.parametrize("amount", [0, -5, "0", "0.4"])
def test_vietqr_amount_must_be_positive(amount):
    """Auch Beträge, die auf 0 VND gerundet werden, sind ungültig."""
    with pytest.raises(OutOfRange) as exc:
        encode("vietqr", {**BASE, "amount": amount})
    assert exc.value.field == "amount"


def test_vietqr_smallest_amount_rounds_up_to_one_dong():
    assert "amount=1" in encode("vietqr", {**BASE, "amount": "0.5"}).canonical


def test_vietqr_amount_rounds_half_up_to_whole_dong():
    assert "amount=1235" in encode("vietqr", {**BASE, "amount": "1234.5"}).canonical
    assert "amount=1234" in encode("vietqr", {**BASE, "amount": 1234.4}).canonical


def test_vietqr_amount_not_numeric():
    with pytest.raises(BadFormat):
        encode("vietqr", {**BASE, "amount": "zehn"})


def test_vietqr_unknown_bank_lists_valid_codes():
    with pytest.raises(BadFormat) as exc:
        encode("vietqr", {**BASE, "bankCode": "XYZ"})
    assert exc.value.field == "bankCode"
    assert "VCB" in exc.value.reason


def test_vietqr_e_wallet():
    payload = encode("vietqr", {**BASE, "bankCode": "momo"})
    assert payload.metadata["bankBin"] == "MOMO"
    assert payload.canonical.startswith("https://img.vietqr.io/image/MOMO-123456789-")


@pytest.mark.parametrize("raw, error, field", [
    ({"accountNumber": "123456789", "accountName": "NGUYEN VAN A"}, MissingField, "bankCode"),
    ({**BASE, "accountNumber": "  "}, MissingField, "accountNumber"),
    ({**BASE, "accountNumber": "12345"}, BadFormat, "accountNumber"),
    ({**BASE, "accountNumber": "1" * 21}, BadFormat, "accountNumber"),
    ({**BASE, "accountName": "A"}, OutOfRange, "accountName"),
    ({**BASE, "accountName": "A" * 51}, OutOfRange, "accountName"),
    ({**BASE, "description": "x" * 256}, OutOfRange, "description"),
    ({**BASE, "template": "fancy"}, UnsupportedOption, "template"),
])
def test_vietqr_rejections(raw, error, field):
    with pytest.raises(error) as exc:
        encode("vietqr", raw)
    assert exc.value.field == field


def test_vietqr_first_violation_wins():
    """Bankcode wird vor der Kontonummer geprüft."""
    with pytest.raises(BadFormat) as exc:
        encode("vietqr", {**BASE, "bankCode": "XYZ", "accountNumber": "1"})
    assert exc.value.field == "bankCode"


def test_vietqr_extra_banks_file(tmp_path, monkeypatch, fresh_reference_tables):
    """Zusätzliche Banken können per JSON-Datei nachgeladen werden."""
    extra = tmp_path / "banks.json"
    extra.write_text(json.dumps([{"code": "xyz", "name": "XYZ Bank", "bin": "970999"}]))
    monkeypatch.setattr(settings, "QR_EXTRA_BANKS_FILE", str(extra))

    payload = encode("vietqr", {**BASE, "bankCode": "XYZ"})
    assert payload.metadata["bankName"] == "XYZ Bank"
    assert payload.metadata["bankBin"] == "970999"
