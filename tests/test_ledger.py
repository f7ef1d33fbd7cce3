# tests/test_ledger.py
from catalog_app.ledger import CartLedger
from catalog_app.models import Product

def catalog():
    return [
        Product(sku="A1", name="Mug", priceExVat=10, category="Kitchen"),
        Product(sku="B2", name="Bowl", priceExVat=20, category="Kitchen"),
    ]

def test_initialize_uses_qty_hint():
    ledger = CartLedger()
    ledger.initialize([
        Product(sku="a", qty=3),
        Product(sku="b", qty="2.7"),
        Product(sku="c", qty=-4),
        Product(sku="d", qty="lots"),
        Product(sku="e"),
    ])
    assert ledger.qty_by_sku == {"a": 3, "b": 2, "c": 0, "d": 0, "e": 0}

def test_initialize_is_idempotent():
    c = [Product(sku="a", qty=3), Product(sku="b")]
    once = CartLedger()
    once.initialize(c)
    twice = CartLedger()
    twice.initialize(c)
    twice.initialize(c)
    assert once.qty_by_sku == twice.qty_by_sku

def test_initialize_does_not_overwrite():
    ledger = CartLedger()
    ledger.set_quantity("a", 7)
    ledger.initialize([Product(sku="a", qty=1)])
    assert ledger.get("a") == 7

def test_set_quantity_normalizes():
    ledger = CartLedger()
    assert ledger.set_quantity("A1", "-3.7") == 0
    assert ledger.get("A1") == 0
    assert ledger.set_quantity("A1", "4.9") == 4
    assert ledger.get("A1") == 4
    assert ledger.set_quantity("A1", "") == 0
    assert ledger.set_quantity("A1", "x") == 0

def test_scenario_aggregate():
    c = catalog()
    ledger = CartLedger()
    ledger.initialize(c)
    ledger.set_quantity("A1", 2)
    ledger.set_quantity("B2", 1)
    summary = ledger.aggregate(c)
    assert summary.count == 3
    assert summary.subtotal == 40
    assert summary.currency == "R"

def test_aggregate_is_additive():
    c = [
        Product(sku="a", priceExVat=1.25),
        Product(sku="b", priceExVat="3"),
        Product(sku="c", priceExVat=None),
    ]
    ledger = CartLedger()
    ledger.initialize(c)
    for sku, q in [("a", 4), ("b", 2), ("c", 9)]:
        ledger.set_quantity(sku, q)
    summary = ledger.aggregate(c)
    assert summary.subtotal == sum(ledger.get(p.sku) * p.price_ex_vat for p in c)
    assert summary.count == 15

def test_clear_zeroes_without_removing():
    c = catalog()
    ledger = CartLedger()
    ledger.initialize(c)
    ledger.set_quantity("A1", 5)
    ledger.clear()
    assert ledger.qty_by_sku == {"A1": 0, "B2": 0}
    summary = ledger.aggregate(c)
    assert summary.count == 0
    assert summary.subtotal == 0

def test_unknown_sku_recorded_but_not_counted():
    c = catalog()
    ledger = CartLedger()
    ledger.initialize(c)
    ledger.set_quantity("ZZ", 3)
    assert "ZZ" in ledger
    assert ledger.aggregate(c).count == 0

def test_currency_comes_from_last_product_in_cart():
    c = [
        Product(sku="a", priceExVat=1, currency="USD"),
        Product(sku="b", priceExVat=1, currency=""),
        Product(sku="c", priceExVat=1, currency="EUR"),
    ]
    ledger = CartLedger()
    ledger.initialize(c)
    assert ledger.aggregate(c).currency == "R"
    ledger.set_quantity("a", 1)
    ledger.set_quantity("b", 1)
    assert ledger.aggregate(c).currency == "USD"
    ledger.set_quantity("c", 1)
    assert ledger.aggregate(c).currency == "EUR"
