# src/config/settings.py

"""Central configuration for the flight_offers engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the flight_offers engine."""

    # --- Ranking ---
    POINT_VALUE_PER_MILE: float = float(
        os.getenv("FLIGHT_OFFERS_POINT_VALUE", "0.015")
    )                                   # Cash value of one mile
    TOP_RANKED_COUNT: int = int(
        os.getenv("FLIGHT_OFFERS_TOP_RANKED", "5")
    )                                   # Offers flagged for auto-enrichment
    SORT_MODES: list[str] = ["cheap", "best"]
    DEFAULT_SORT_MODE: str = "cheap"

    # --- Cabins ---
    DEFAULT_CABIN: str = "COACH"
    STANDARD_CABINS: list[str] = [
        "COACH",
        "PREMIUM-COACH",
        "BUSINESS",
        "FIRST",
    ]
    CABIN_ALIASES: dict[str, str] = {
        "COACH": "COACH",
        "ECONOMY": "COACH",
        "PREMIUM-COACH": "PREMIUM-COACH",
        "PREMIUM_COACH": "PREMIUM-COACH",
        "PREMIUM_ECONOMY": "PREMIUM-COACH",
        "PREMIUM": "PREMIUM-COACH",
        "BUSINESS": "BUSINESS",
        "FIRST": "FIRST",
    }
    CABIN_LABELS: dict[str, str] = {
        "COACH": "Economy",
        "PREMIUM-COACH": "Premium Economy",
        "BUSINESS": "Business",
        "FIRST": "First",
    }

    # --- Bucketing ---
    BUNDLE_STOPS_OUTBOUND_ONLY: bool = True  # Ignore return-leg stops

    # --- Result cache ---
    RESULT_CACHE_TTL: float = float(
        os.getenv("FLIGHT_OFFERS_CACHE_TTL", "3600")
    )                                   # Seconds before a page goes stale
    DEFAULT_PAGE_SIZE: int = 25
    DEFAULT_TIME_TOLERANCE: int = 120   # Minutes, enrichment matching window

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
    LOG_KEEP_RUNS: int = 20             # Older run_*.log files are pruned
