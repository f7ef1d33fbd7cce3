"""
Configuration module for the catalog browser
"""
import os
from dataclasses import dataclass

from .core import DEFAULT_CURRENCY


@dataclass
class Config:
    """Configuration settings for the catalog browser and its data host"""

    # Where the browser fetches the catalog from (must be http/https)
    DATA_URL: str = os.getenv("CATALOG_DATA_URL", "http://127.0.0.1:8085/items.json")

    # Document served by the data host
    DATA_FILE: str = os.getenv("CATALOG_DATA_FILE", "data/items.json")
    ASSETS_DIR: str = "data/assets"

    FALLBACK_IMAGE: str = "./assets/imgs/logo.png"
    DEFAULT_CURRENCY: str = DEFAULT_CURRENCY
    REQUEST_TIMEOUT: int = 10

# Global configuration instance
config = Config()
