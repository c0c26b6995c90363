# src/models/offer.py

"""Flight offer data model: a tagged union of two result shapes.

``SingleItinerary`` is one priced itinerary made of ordered slices.
``RoundTripBundle`` is one outbound slice sold with several alternate
return slices, each priced on its own.  Both expose the same accessors
(``id``, ``currency``, ``total_amount``, ``display_total``, mileage totals
and ``itinerary_slices``), so downstream code branches on ``kind`` only
where the shapes genuinely differ.
"""

from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass
class MileageCandidate:
    """One award-redemption option matched against a segment."""

    mileage: float = 0.0
    mileage_price: float = 0.0
    carrier_code: str = ""
    exact_match: bool = False


@dataclass
class Segment:
    """One scheduled flight inside a slice."""

    carrier_code: str = ""
    carrier_name: str = ""
    marketing_carrier: str = ""
    flight_number: str = ""
    booking_class: str = ""
    origin: str = ""
    destination: str = ""
    departure: str = ""
    breakdown: list[MileageCandidate] = field(
        default_factory=lambda: list[MileageCandidate]()
    )


@dataclass
class Slice:
    """One directional leg of a journey (outbound or return)."""

    origin: str = ""
    destination: str = ""
    departure: str = ""
    arrival: str = ""
    duration: int = 0                   # Minutes
    stops: list[str] = field(default_factory=lambda: list[str]())
    flights: list[str] = field(default_factory=lambda: list[str]())
    cabins: list[str] = field(default_factory=lambda: list[str]())
    segments: list[Segment] = field(
        default_factory=lambda: list[Segment]()
    )
    mileage: float | None = None
    mileage_price: float | None = None


@dataclass(eq=False)
class SingleItinerary:
    """A priced itinerary with one or more ordered slices."""

    id: str
    slices: list[Slice] = field(default_factory=lambda: list[Slice]())
    display_total: float = 0.0
    total_amount: float = 0.0
    currency: str = "USD"
    total_mileage: float | None = None
    total_mileage_price: float | None = None
    kind: Literal["single"] = "single"

    @property
    def itinerary_slices(self) -> list[Slice]:
        return self.slices


@dataclass
class ReturnOption:
    """An alternate return slice with its own round-trip price."""

    return_slice: Slice
    display_total: float = 0.0
    total_amount: float = 0.0
    original_offer_id: str = ""


@dataclass(eq=False)
class RoundTripBundle:
    """One outbound slice plus alternate, separately priced returns.

    Prices are those of the first return option, which is the one shown
    collapsed in the result list.
    """

    id: str
    outbound: Slice
    return_options: list[ReturnOption] = field(
        default_factory=lambda: list[ReturnOption]()
    )
    currency: str = "USD"
    carrier_code: str = ""
    carrier_name: str = ""
    kind: Literal["round_trip"] = "round_trip"

    @property
    def display_total(self) -> float:
        if not self.return_options:
            return 0.0
        return self.return_options[0].display_total

    @property
    def total_amount(self) -> float:
        if not self.return_options:
            return 0.0
        return self.return_options[0].total_amount

    @property
    def total_mileage(self) -> float | None:
        return None

    @property
    def total_mileage_price(self) -> float | None:
        return None

    @property
    def itinerary_slices(self) -> list[Slice]:
        if not self.return_options:
            return [self.outbound]
        return [self.outbound, self.return_options[0].return_slice]


Offer = Union[SingleItinerary, RoundTripBundle]

OFFER_TYPES: tuple[type, ...] = (SingleItinerary, RoundTripBundle)
