# src/clustering/tie_break.py

"""Deterministic ordering of cluster members and the metrics it uses."""

import math

from src.clustering.signatures import SignatureCanonicalizer
from src.config.settings import Settings
from src.models.offer import Offer, Slice


def total_duration(offer: Offer) -> int:
    """Sum of the offer's slice durations in minutes."""
    return sum(s.duration or 0 for s in offer.itinerary_slices)


def cash_price(offer: Offer) -> float:
    """Display price; first return option's price for round-trip bundles."""
    return offer.display_total or 0.0


def _slice_mileage(slice_: Slice, point_value: float) -> tuple[float, float]:
    """Slice mileage and copay, from slice totals or segment breakdowns.

    Each segment contributes its best-valued candidate (lowest
    ``mileage * point_value + price``).
    """
    if slice_.mileage:
        return slice_.mileage, slice_.mileage_price or 0.0

    miles = 0.0
    copay = 0.0
    for seg in slice_.segments:
        candidates = [c for c in seg.breakdown if c.mileage > 0]
        if not candidates:
            continue
        best = min(
            candidates,
            key=lambda c: c.mileage * point_value + c.mileage_price,
        )
        miles += best.mileage
        copay += best.mileage_price
    return miles, copay


def mileage_totals(
    offer: Offer,
    point_value: float | None = None,
) -> tuple[float, float]:
    """Total miles and cash copay for *offer*, ``(0, 0)`` when unknown."""
    pv = Settings.POINT_VALUE_PER_MILE if point_value is None else point_value
    if offer.total_mileage:
        return offer.total_mileage, offer.total_mileage_price or 0.0

    miles = 0.0
    copay = 0.0
    for slice_ in offer.itinerary_slices:
        slice_miles, slice_copay = _slice_mileage(slice_, pv)
        miles += slice_miles
        copay += slice_copay
    return miles, copay


def mileage_value(offer: Offer, point_value: float | None = None) -> float:
    """Cash-equivalent value of the award option; ``inf`` without miles."""
    pv = Settings.POINT_VALUE_PER_MILE if point_value is None else point_value
    miles, copay = mileage_totals(offer, pv)
    if miles <= 0:
        return math.inf
    return miles * pv + copay


class TieBreakSorter:
    """Order equivalent offers so the most "parent-like" one leads."""

    @staticmethod
    def sort_key(
        offer: Offer,
        point_value: float | None = None,
    ) -> tuple[int, str, int, float, float]:
        """Comparator chain, compared left to right.

        1. Length of the primary flight number (marketing code before
           code-share numbers).
        2. The flight number itself.
        3. Total duration.
        4. Cash price.
        5. Mileage value (offers without miles last).
        """
        flight_number = SignatureCanonicalizer.primary_flight_number(offer)
        return (
            len(flight_number),
            flight_number,
            total_duration(offer),
            cash_price(offer),
            mileage_value(offer, point_value),
        )

    @staticmethod
    def sort(
        offers: list[Offer],
        point_value: float | None = None,
    ) -> list[Offer]:
        """Return *offers* sorted; full ties keep their input order."""
        return sorted(
            offers,
            key=lambda o: TieBreakSorter.sort_key(o, point_value),
        )

    @staticmethod
    def split(
        offers: list[Offer],
        point_value: float | None = None,
    ) -> tuple[Offer, list[Offer]]:
        """Sort *offers* and return ``(primary, similar)``.

        Raises ``IndexError`` on an empty list; clusters always hold at
        least one offer.
        """
        ordered = TieBreakSorter.sort(offers, point_value)
        return ordered[0], ordered[1:]
