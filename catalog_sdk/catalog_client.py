# catalog_sdk/catalog_client.py
import logging
from typing import Any, List, Optional

import httpx
import requests

from catalog_app.config import config
from catalog_app.models import Product

logger = logging.getLogger("catalog_browser.loader")

LOAD_HINT = "Tip: open the catalog via http:// (not file://) so the browser can fetch items.json."


class LoadError(Exception):
    """The catalog could not be fetched, or the payload is not an array of products."""

    hint = LOAD_HINT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def parse_catalog(data: Any) -> List[Product]:
    if not isinstance(data, list):
        raise LoadError("items.json must contain a JSON array of products.")
    products = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise LoadError(f"items.json entry {i} is not a product object.")
        products.append(Product.model_validate(record))
    return products


class CatalogClient:
    def __init__(self, data_url: Optional[str] = None, timeout: Optional[int] = None, session=None):
        self.data_url = data_url or config.DATA_URL
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.session = session if session is not None else requests.Session()

    def _check(self, status_code: int):
        if not 200 <= status_code < 300:
            raise LoadError(f"Failed to load {self.data_url} ({status_code})")

    def _decode(self, r) -> List[Product]:
        self._check(r.status_code)
        try:
            data = r.json()
        except ValueError as e:
            raise LoadError(f"{self.data_url} did not return JSON: {e}") from e
        products = parse_catalog(data)
        logger.info("Loaded %d products from %s", len(products), self.data_url)
        return products

    # Sync load (requests)
    def load(self) -> List[Product]:
        try:
            r = self.session.get(self.data_url, headers={"Cache-Control": "no-store"}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Catalog fetch failed: %s", e)
            raise LoadError(f"Failed to load {self.data_url}: {e}") from e
        try:
            return self._decode(r)
        except LoadError as e:
            logger.error("%s", e)
            raise

    # Async load (httpx)
    async def load_async(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> List[Product]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=transport) as client:
                r = await client.get(self.data_url, headers={"Cache-Control": "no-store"})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Catalog fetch failed: %s", e)
            raise LoadError(f"Failed to load {self.data_url}: {e}") from e
        try:
            return self._decode(r)
        except LoadError as e:
            logger.error("%s", e)
            raise
