# catalog_app/core.py
import math
import unicodedata
from typing import Any

ALL_CATEGORIES = "__all__"
DEFAULT_CURRENCY = "R"

# ---------------------------
# Coercion helpers
# ---------------------------
def safe_text(v: Any) -> str:
    return "" if v is None else str(v)

def normalize(v: Any) -> str:
    return safe_text(v).strip().lower()

def to_number(v: Any, default: float = 0) -> float:
    """
    Loose numeric coercion: numbers pass through, strings are trimmed and parsed
    ("" -> 0). Anything unparseable, too large for a float or non-finite gives `default`.
    """
    if v is None:
        return default
    if isinstance(v, bool):
        return float(v)
    if not isinstance(v, (int, float)):
        v = str(v).strip()
        if v == "":
            return 0
    try:
        n = float(v)
    except (ValueError, OverflowError):
        return default
    if not math.isfinite(n):
        return default
    return n

def to_quantity(v: Any) -> int:
    # non-negative integer, floors decimals
    return max(0, math.floor(to_number(v)))

def format_money(amount: Any, currency: str = DEFAULT_CURRENCY) -> str:
    n = to_number(amount or 0)
    return f"{currency} {n:.2f}"

# ---------------------------
# Collation
# ---------------------------
# whitespace < punctuation and symbols < digits < letters; ASCII punctuation
# in the root collation order
PUNCTUATION_ORDER = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"

def _strip_accents(s: str) -> str:
    decomposed = unicodedata.normalize("NFKD", s)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

def _char_weight(ch: str):
    if ch in PUNCTUATION_ORDER:
        return (1, PUNCTUATION_ORDER.index(ch), ch)
    cat = unicodedata.category(ch)
    if ch.isspace() or cat.startswith("Z"):
        return (0, 0, ch)
    if cat[0] in "PS":
        return (1, len(PUNCTUATION_ORDER), ch)
    if cat[0] == "N":
        return (3, 0, ch)
    return (4, 0, ch)

def collation_key(v: Any):
    # accents and case are ignored first; lowercase sorts before uppercase on ties
    s = safe_text(v)
    folded = s.casefold()
    primary = tuple(_char_weight(ch) for ch in _strip_accents(folded))
    return (primary, folded, s.swapcase())
