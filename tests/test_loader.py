# tests/test_loader.py
import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from catalog_app.controller import init_async
from catalog_app.main import create_app
from catalog_app.render import ErrorNotice, Surface
from catalog_sdk.catalog_client import CatalogClient, LoadError

URL = "http://testserver/items.json"

def serve(tmp_path, payload):
    data = tmp_path / "items.json"
    data.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return create_app(data_file=str(data), assets_dir=str(tmp_path / "assets"))

def test_load_returns_products(tmp_path):
    app = serve(tmp_path, [
        {"sku": "A1", "name": "Mug", "priceExVat": 10, "category": "Kitchen", "extra": "ignored"},
        {"sku": 42, "name": None, "priceExVat": "oops"},
    ])
    products = CatalogClient(URL, session=TestClient(app)).load()
    assert [p.sku for p in products] == ["A1", "42"]
    assert products[0].price_ex_vat == 10
    assert products[1].name == ""
    assert products[1].price_ex_vat == 0
    assert products[1].display_currency == "R"

def test_non_array_payload_is_load_error(tmp_path):
    app = serve(tmp_path, {"items": []})
    with pytest.raises(LoadError) as e:
        CatalogClient(URL, session=TestClient(app)).load()
    assert "JSON array" in str(e.value)

def test_non_object_record_is_load_error(tmp_path):
    app = serve(tmp_path, [{"sku": "A1"}, "B2"])
    with pytest.raises(LoadError):
        CatalogClient(URL, session=TestClient(app)).load()

def test_bad_status_is_load_error(tmp_path):
    app = serve(tmp_path, "[not json")
    with pytest.raises(LoadError) as e:
        CatalogClient(URL, session=TestClient(app)).load()
    assert str(e.value) == f"Failed to load {URL} (500)"

def test_missing_document_is_load_error(tmp_path):
    app = create_app(data_file=str(tmp_path / "nope.json"))
    with pytest.raises(LoadError) as e:
        CatalogClient(URL, session=TestClient(app)).load()
    assert "(404)" in str(e.value)

@pytest.mark.parametrize("url", ["file:///tmp/items.json", "items.json"])
def test_non_http_source_is_load_error(url):
    with pytest.raises(LoadError) as e:
        CatalogClient(url).load()
    assert "http://" in e.value.hint

def test_load_async(tmp_path):
    app = serve(tmp_path, [{"sku": "A1", "name": "Mug"}])
    transport = httpx.ASGITransport(app=app)
    products = asyncio.run(CatalogClient(URL).load_async(transport=transport))
    assert [p.name for p in products] == ["Mug"]

def test_load_async_rejects_file_url():
    with pytest.raises(LoadError):
        asyncio.run(CatalogClient("file:///tmp/items.json").load_async())

def test_init_async(tmp_path):
    app = serve(tmp_path, [{"sku": "A1", "name": "Mug", "priceExVat": 3, "qty": 2}])
    surface = Surface()
    controller = asyncio.run(init_async(CatalogClient(URL), surface, transport=httpx.ASGITransport(app=app)))
    assert controller is not None
    assert surface.cart_subtotal == "R 6.00"

def test_init_async_failure(tmp_path):
    app = serve(tmp_path, {"not": "a list"})
    surface = Surface()
    controller = asyncio.run(init_async(CatalogClient(URL), surface, transport=httpx.ASGITransport(app=app)))
    assert controller is None
    assert isinstance(surface.items_grid, ErrorNotice)

# ---------------------------
# Data host
# ---------------------------
def test_items_not_cached(tmp_path):
    client = TestClient(serve(tmp_path, []))
    r = client.get("/items.json")
    assert r.status_code == 200
    assert r.json() == []
    assert r.headers["cache-control"] == "no-store"

def test_health_and_assets(tmp_path):
    (tmp_path / "assets" / "imgs").mkdir(parents=True)
    (tmp_path / "assets" / "imgs" / "logo.png").write_bytes(b"\x89PNG")
    client = TestClient(serve(tmp_path, []))
    assert client.get("/health").json() == {"status": "ok", "catalog": True}
    assert client.get("/assets/imgs/logo.png").status_code == 200
    assert client.get("/assets/imgs/missing.png").status_code == 404

def test_huge_integer_fields_degrade_to_zero(tmp_path):
    huge = "1" + "0" * 400
    app = serve(tmp_path, f'[{{"sku": "A1", "name": "Mug", "priceExVat": {huge}}},'
                          f' {{"sku": "B2", "name": "Bowl", "priceExVat": 20, "qty": {huge}}}]')
    products = CatalogClient(URL, session=TestClient(app)).load()
    assert [p.price_ex_vat for p in products] == [0, 20]
    assert products[1].qty == 0
