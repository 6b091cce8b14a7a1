import pytest
from fastapi.routing import APIRoute

from main import app

VIETQR = {"bankCode": "vcb", "accountNumber": "123456789", "accountName": "NGUYEN VAN A"}


@pytest.mark.asyncio
async def test_all_get_routes(client):
    """
    Testet alle GET-Routen ohne Pfadparameter der FastAPI-App.
    """
    failed = []

    for route in app.routes:
        if not isinstance(route, APIRoute):
            continue
        if "GET" not in route.methods or "{" in route.path:
            continue

        response = await client.get(route.path)
        if response.status_code != 200:
            failed.append((route.path, response.status_code))

    assert not failed, (
        "\n\n❌ FEHLERHAFTE ROUTEN GEFUNDEN:\n" +
        "\n".join([f"  - {path}: {err}" for path, err in failed]) +
        "\n"
    )


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_list_types(client):
    response = await client.get("/qr/types")
    types = response.json()["data"]
    assert len(types) == 19
    assert types[0]["type"] == "vietqr"
    assert types[0]["required"] == ["bankCode", "accountNumber", "accountName"]


@pytest.mark.asyncio
async def test_list_banks_and_currencies(client):
    banks = (await client.get("/qr/vietqr/banks")).json()["data"]
    assert {"code": "VCB", "name": "Vietcombank", "bin": "970436"} in banks

    currencies = (await client.get("/qr/wechat-pay/currencies")).json()["data"]
    cny = next(c for c in currencies if c["code"] == "CNY")
    assert cny["maxAmount"] == 1000000


@pytest.mark.asyncio
async def test_create_vietqr(client):
    response = await client.post("/qr/vietqr", json={"data": {**VIETQR, "amount": 100000}})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["type"] == "vietqr"
    assert "VCB-123456789" in data["qr_string"]
    assert data["qr_image"].startswith("data:image/png;base64,")
    assert data["metadata"]["amount"] == 100000
    assert data["title"] == "VietQR - Vietcombank"


@pytest.mark.asyncio
async def test_amounts_are_json_numbers(client):
    """Decimal-Beträge kommen als Zahlen an, nicht als Strings."""
    response = await client.post(
        "/qr/wechat-pay",
        json={"data": {"merchantId": "1234567890", "amount": "12.345"}},
    )
    metadata = response.json()["data"]["metadata"]
    assert metadata["amount"] == 12.35
    assert isinstance(metadata["amount"], float)
    assert metadata["formattedAmount"] == "¥12.35"


@pytest.mark.asyncio
async def test_create_with_custom_title(client):
    response = await client.post(
        "/qr/vcard",
        json={"data": {"firstName": "Anna", "title": "CTO"}, "title": "Visitenkarte"},
    )
    data = response.json()["data"]
    assert data["title"] == "Visitenkarte"
    assert "TITLE:CTO" in data["qr_string"]


@pytest.mark.asyncio
async def test_validation_error_is_400(client):
    response = await client.post("/qr/vietqr", json={"data": {**VIETQR, "amount": 600000000}})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "OutOfRange"
    assert body["field"] == "amount"
    assert "500,000,000" in body["details"]


@pytest.mark.asyncio
async def test_unknown_type_is_400(client):
    response = await client.post("/qr/bitcoin", json={"data": {}})
    assert response.status_code == 400
    assert response.json()["error"] == "UnsupportedOption"


@pytest.mark.asyncio
async def test_image_endpoint(client):
    response = await client.post(
        "/qr/wechat-pay/image",
        json={"data": {"merchantId": "1234567890"}, "format": "jpeg", "size": 200},
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"
    assert response.content.startswith(b"\xff\xd8")


@pytest.mark.asyncio
async def test_unsupported_image_format_is_422(client):
    response = await client.post("/qr/sms", json={"data": {"phone": "12345"}, "format": "gif"})
    assert response.status_code == 422
