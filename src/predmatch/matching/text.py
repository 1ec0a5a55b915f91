"""Title/outcome text normalization, entity extraction and title similarity."""

from __future__ import annotations

import re

from rapidfuzz import fuzz

_NON_WORD_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")

YEAR_RE = re.compile(r"\b20\d{2}\b")
QUARTER_RE = re.compile(r"\bq[1-4]\b")
MONTH_RE = re.compile(
    r"\b(?:january|february|march|april|may|june|july|august|september|october|november|december"
    r"|jan|feb|mar|apr|jun|jul|aug|sep|sept|oct|nov|dec)\b"
)
SCALE_RE = re.compile(r"\b\d+\s*(?:trillion|billion|million|thousand|k|m|b|t)\b")
# Currency and percent literals need their symbols, which normalize() removes.
CURRENCY_RE = re.compile(r"[$€£]\d[\d,]*(?:\.\d+)?[kmbt]?\b")
PERCENT_RE = re.compile(r"\d+(?:\.\d+)?%")

# Curated vocabulary. Extend here; there is no general NER.
KEY_TERMS = (
    # assets
    "bitcoin", "btc", "ethereum", "eth", "solana", "xrp", "dogecoin",
    # institutions
    "federal reserve", "fed", "ecb", "sec", "nasdaq", "s p 500",
    # politics
    "trump", "biden", "harris", "vance", "newsom", "gop", "democrats?", "republicans?",
    # companies
    "spacex", "starship", "tesla", "apple", "microsoft", "nvidia", "google", "amazon", "meta",
    "ai", "openai", "chatgpt",
    # sports
    "dolphins", "bayern", "madrid",
)
KEY_TERM_RE = re.compile(r"\b(?:" + "|".join(KEY_TERMS) + r")\b")

_NORMALIZED_PATTERNS = (YEAR_RE, QUARTER_RE, MONTH_RE, SCALE_RE, KEY_TERM_RE)
_RAW_PATTERNS = (CURRENCY_RE, PERCENT_RE)


def normalize(text: str | None) -> str:
    """Lower-case, turn punctuation into spaces, collapse whitespace. Idempotent."""
    if not text:
        return ""
    text = _NON_WORD_RE.sub(" ", text.lower())
    return _SPACE_RE.sub(" ", text).strip()


def extract_entities(title: str | None) -> set[str]:
    """Years, quarters, months, amounts, percentages and key terms found in a title."""
    normalized = normalize(title)
    raw = (title or "").lower()
    entities: set[str] = set()
    for pattern in _NORMALIZED_PATTERNS:
        entities.update(m.group(0) for m in pattern.finditer(normalized))
    for pattern in _RAW_PATTERNS:
        entities.update(m.group(0) for m in pattern.finditer(raw))
    return entities


def extract_years(title: str | None) -> set[str]:
    return set(YEAR_RE.findall(normalize(title)))


def title_similarity(title_a: str | None, title_b: str | None) -> float:
    """Symmetric token-set similarity of the normalized titles, in [0, 1]."""
    a, b = normalize(title_a), normalize(title_b)
    if not a or not b:
        return 0.0
    return fuzz.token_set_ratio(a, b) / 100.0
