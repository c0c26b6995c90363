# src/models/search_params.py

"""Search request descriptor used to key the result cache."""

from dataclasses import dataclass, field

from src.config.settings import Settings


@dataclass
class SliceParams:
    """Per-leg search parameters of a multi-city request."""

    origins: list[str] = field(default_factory=lambda: list[str]())
    destinations: list[str] = field(default_factory=lambda: list[str]())
    depart_date: str = ""
    cabin: str = "COACH"
    flexibility: int = 0
    via: str = ""
    routing: str = ""
    ext: str = ""
    routing_ret: str = ""
    ext_ret: str = ""
    return_flexibility: int = 0
    nonstop: bool = False
    departure_date_type: str = "depart"
    departure_date_modifier: str = "0"
    departure_preferred_times: list[int] = field(
        default_factory=lambda: list[int]()
    )
    return_date_type: str = "depart"
    return_date_modifier: str = "0"
    return_preferred_times: list[int] = field(
        default_factory=lambda: list[int]()
    )
    max_stops: int = -1
    extra_stops: int = -1
    allow_airport_changes: bool = True
    show_only_available: bool = True
    aero: bool = False
    fetch_summary: bool = False


@dataclass
class SearchParams:
    """One logical flight search, independent of the page requested."""

    trip_type: str = "oneWay"
    origin: str = ""
    destination: str = ""
    depart_date: str = ""
    return_date: str = ""
    cabin: str = "COACH"
    passengers: int = 1
    max_stops: int = -1
    extra_stops: int = -1
    flexibility: int = 0
    slices: list[SliceParams] = field(
        default_factory=lambda: list[SliceParams]()
    )
    page_size: int = Settings.DEFAULT_PAGE_SIZE
    allow_airport_changes: bool = True
    show_only_available: bool = True
    aero: bool = False
    airlines: str = ""
    strict_airline_match: bool = False
    time_tolerance: int = Settings.DEFAULT_TIME_TOLERANCE
    strict_leg_match: bool = False
    summary: bool = False
