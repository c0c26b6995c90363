# src/clustering/cabin_filter.py

"""Cabin normalisation, cabin-tab filtering and per-cabin price ranges."""

import logging

from src.config.settings import Settings
from src.models.cluster import CabinPriceRange
from src.models.offer import Offer

logger = logging.getLogger("flight_offers.clustering")


class CabinFilter:
    """Map raw cabin codes onto the four standard cabins and filter by them."""

    @staticmethod
    def normalise_cabin(cabin: str) -> str:
        """Return the standard code for *cabin* (``ECONOMY`` -> ``COACH``).

        Unknown codes are returned upper-cased and otherwise untouched.
        """
        if not cabin:
            return ""
        upper = cabin.strip().upper()
        return Settings.CABIN_ALIASES.get(upper, upper)

    @staticmethod
    def primary_cabin(offer: Offer) -> str:
        """Cabin of the first slice's first segment, ``COACH`` if unknown."""
        slices = offer.itinerary_slices
        if not slices or not slices[0].cabins:
            return Settings.DEFAULT_CABIN
        return (
            CabinFilter.normalise_cabin(slices[0].cabins[0])
            or Settings.DEFAULT_CABIN
        )

    @staticmethod
    def filter_by_cabin(
        offers: list[Offer],
        cabin: str | None,
    ) -> tuple[list[Offer], int]:
        """Keep offers whose primary cabin equals *cabin*.

        A falsy *cabin* disables filtering.  Returns the kept offers and
        the count of excluded ones.
        """
        if not cabin:
            return list(offers), 0

        wanted = CabinFilter.normalise_cabin(cabin)
        kept = [
            offer
            for offer in offers
            if CabinFilter.primary_cabin(offer) == wanted
        ]
        excluded = len(offers) - len(kept)

        if excluded:
            logger.info(
                "Cabin filter %s excluded %d offers", wanted, excluded
            )

        return kept, excluded

    @staticmethod
    def price_ranges(offers: list[Offer]) -> dict[str, CabinPriceRange]:
        """Min/max display price and count per standard cabin.

        Cabins with no offers report a zero range.
        """
        ranges = {
            cabin: CabinPriceRange() for cabin in Settings.STANDARD_CABINS
        }
        for offer in offers:
            cabin_range = ranges.get(CabinFilter.primary_cabin(offer))
            if cabin_range is None:
                continue
            price = offer.display_total
            if cabin_range.count == 0:
                cabin_range.min_price = price
                cabin_range.max_price = price
            else:
                cabin_range.min_price = min(cabin_range.min_price, price)
                cabin_range.max_price = max(cabin_range.max_price, price)
            cabin_range.count += 1
        return ranges
