"""Built-in demo market set, used when sync runs in demo mode."""

from __future__ import annotations

from typing import Any

from predmatch.ingestion.snapshot import parse_records
from predmatch.models import Market


def _yes_no(yes: float, no: float, yes_volume: float, no_volume: float) -> list[dict[str, Any]]:
    return [
        {"name": "Yes", "price": yes, "volume": yes_volume},
        {"name": "No", "price": no, "volume": no_volume},
    ]


DEMO_RECORDS: dict[str, list[dict[str, Any]]] = {
    "polymarket": [
        {
            "id": "poly-1",
            "title": "Will Bitcoin exceed $100,000 by end of 2025?",
            "description": "Resolves YES if BTC price exceeds $100,000 at any point before December 31, 2025",
            "category": "Crypto",
            "url": "https://polymarket.com/markets?_q=Bitcoin%20100000%202025",
            "volume": 5200000,
            "liquidity": 850000,
            "outcomes": _yes_no(0.72, 0.28, 3100000, 2100000),
        },
        {
            "id": "poly-2",
            "title": "Will the Fed cut rates in Q1 2026?",
            "description": "Resolves YES if Federal Reserve announces rate cut in Jan-Mar 2026",
            "category": "Economics",
            "url": "https://polymarket.com/markets?_q=Fed%20cut%20rates%20Q1%202026",
            "volume": 3400000,
            "liquidity": 620000,
            "outcomes": _yes_no(0.45, 0.55, 1800000, 1600000),
        },
        {
            "id": "poly-3",
            "title": "Will AI pass the Turing test by 2027?",
            "category": "Technology",
            "url": "https://polymarket.com/markets?_q=AI%20Turing%20test%202027",
            "volume": 890000,
            "liquidity": 180000,
            "outcomes": _yes_no(0.38, 0.62, 520000, 370000),
        },
        {
            "id": "poly-4",
            "title": "Will SpaceX Starship reach orbit in 2026?",
            "category": "Space",
            "url": "https://polymarket.com/markets?_q=SpaceX%20Starship%20orbit%202026",
            "volume": 1250000,
            "liquidity": 290000,
            "outcomes": _yes_no(0.82, 0.18, 950000, 300000),
        },
        {
            "id": "poly-5",
            "title": "2026 US Midterm Elections: Republicans win House?",
            "category": "Politics",
            "url": "https://polymarket.com/markets?_q=2026%20Midterm%20Republicans%20House",
            "volume": 8900000,
            "liquidity": 1200000,
            "outcomes": _yes_no(0.58, 0.42, 5200000, 3700000),
        },
        {
            "id": "poly-6",
            "title": "Which company reaches $5T market cap first?",
            "category": "Finance",
            "url": "https://polymarket.com/markets?_q=company%205T%20market%20cap",
            "volume": 2100000,
            "liquidity": 450000,
            "outcomes": [
                {"name": "Apple", "price": 0.35, "volume": 700000},
                {"name": "Microsoft", "price": 0.28, "volume": 550000},
                {"name": "Nvidia", "price": 0.42, "volume": 850000},
            ],
        },
    ],
    "kalshi": [
        {
            "id": "kalshi-1",
            "title": "Bitcoin to hit $100K in 2025",
            "description": "Will Bitcoin reach $100,000 by the end of 2025?",
            "category": "Crypto",
            "url": "https://kalshi.com/browse?q=Bitcoin%20100K%202025",
            "volume": 1800000,
            "liquidity": 320000,
            "outcomes": _yes_no(0.68, 0.32, 1100000, 700000),
        },
        {
            "id": "kalshi-2",
            "title": "Federal Reserve rate cut Q1 2026",
            "category": "Economics",
            "url": "https://kalshi.com/browse?q=Federal%20Reserve%20rate%20cut%20Q1%202026",
            "volume": 2100000,
            "liquidity": 410000,
            "outcomes": _yes_no(0.52, 0.48, 1200000, 900000),
        },
        {
            "id": "kalshi-4",
            "title": "Starship successful orbital flight 2026",
            "category": "Space",
            "url": "https://kalshi.com/browse?q=Starship%20orbital%20flight%202026",
            "volume": 680000,
            "liquidity": 145000,
            "outcomes": _yes_no(0.78, 0.22, 480000, 200000),
        },
        {
            "id": "kalshi-5",
            "title": "GOP wins House in 2026 midterms",
            "category": "Politics",
            "url": "https://kalshi.com/browse?q=GOP%20House%202026%20midterms",
            "volume": 4200000,
            "liquidity": 780000,
            "outcomes": _yes_no(0.54, 0.46, 2400000, 1800000),
        },
        {
            "id": "kalshi-6",
            "title": "First company to $5 trillion valuation",
            "category": "Finance",
            "url": "https://kalshi.com/browse?q=company%205%20trillion%20valuation",
            "volume": 920000,
            "liquidity": 210000,
            "outcomes": [
                {"name": "Apple", "price": 0.38, "volume": 350000},
                {"name": "Microsoft", "price": 0.31, "volume": 280000},
                {"name": "Nvidia", "price": 0.29, "volume": 290000},
            ],
        },
    ],
    "manifold": [
        {
            "id": "manifold-1",
            "title": "Will BTC reach $100,000 before 2026?",
            "category": "Crypto",
            "url": "https://manifold.markets/browse?q=Bitcoin%20100000%202026",
            "volume": 45000,
            "liquidity": 12000,
            "outcomes": _yes_no(0.65, 0.35, 28000, 17000),
        },
        {
            "id": "manifold-3",
            "title": "AI passes Turing test before 2027",
            "category": "AI",
            "url": "https://manifold.markets/browse?q=AI%20Turing%20test%202027",
            "volume": 32000,
            "liquidity": 8500,
            "outcomes": _yes_no(0.31, 0.69, 18000, 14000),
        },
        {
            "id": "manifold-5",
            "title": "Republicans control House after 2026 elections",
            "category": "Politics",
            "url": "https://manifold.markets/browse?q=Republicans%20House%202026",
            "volume": 78000,
            "liquidity": 21000,
            "outcomes": _yes_no(0.61, 0.39, 48000, 30000),
        },
    ],
}


def demo_markets() -> list[Market]:
    return parse_records(DEMO_RECORDS)
