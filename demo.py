#!/usr/bin/env python
from fastapi.testclient import TestClient

from catalog_app.controller import init
from catalog_app.main import create_app
from catalog_app.render import Surface
from catalog_sdk.catalog_client import CatalogClient

# Walks the browser through a short session against the bundled data file,
# served in-process so no server has to be running.

def dump(surface: Surface):
    print(f"  {surface.results_meta} | items: {surface.cart_count} | subtotal: {surface.cart_subtotal}")
    for card in surface.cards:
        print(f"    {card.sku:<10} {card.title:<22} {card.price:<18} qty={card.qty_field.value}")

def main():
    http = TestClient(create_app())
    c = CatalogClient(data_url="http://testserver/items.json", session=http)
    surface = Surface()

    # -----------------------------
    # Load
    # -----------------------------
    print("Loading catalog...")
    controller = init(c, surface)
    if controller is None:
        print(f"Load failed: {surface.items_grid.message}")
        return
    dump(surface)

    # -----------------------------
    # Search / filter / sort
    # -----------------------------
    print("\nSearching for 'mates'...")
    surface.search_input.input("mates")
    dump(surface)

    print("\nCategory 'Kitchen', price high to low...")
    surface.search_input.input("")
    surface.category_select.input("Kitchen")
    surface.sort_select.input("price-desc")
    dump(surface)

    # -----------------------------
    # Cart
    # -----------------------------
    print("\nSetting quantities (typing '2' and '-1.5')...")
    surface.get_element("qty-TW-2001").input("2")
    surface.get_element("qty-TW-2002").input("-1.5")
    dump(surface)

    print("\nClearing cart...")
    surface.clear_cart_btn.click()
    dump(surface)

if __name__ == "__main__":
    main()
