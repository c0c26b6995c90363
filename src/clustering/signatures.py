# src/clustering/signatures.py

"""Normalised string keys derived from offer content.

Three keys of increasing coarseness drive clustering:

* ``segment_signature``: airline-agnostic schedule key, unifies
  code-shares of one operated flight.
* ``time_option_signature``: airline + route + departure day + cabins,
  catches one marketed flight sold in several booking classes.
* ``fingerprint``: airline + route + per-slice stop count, the final
  aggressive merge key inside a stop bucket.

Every function is pure and total: missing fields become empty strings.
"""

import re

from src.clustering.cabin_filter import CabinFilter
from src.models.offer import Offer, Slice

_AIRLINE_PREFIX_RE = re.compile(r"^([A-Z]+)")
_DIGITS_ONLY_RE = re.compile(r"^\d+$")


class SignatureCanonicalizer:
    """Derive clustering keys from offers without touching them."""

    @staticmethod
    def _minute(timestamp: str) -> str:
        """Truncate an ISO-8601 timestamp to ``YYYY-MM-DDTHH:MM``."""
        return timestamp[:16] if timestamp else ""

    @staticmethod
    def _day(timestamp: str) -> str:
        return timestamp[:10] if timestamp else ""

    @staticmethod
    def _slice_legs(slice_: Slice) -> list[str]:
        """``origin-destination@minute`` for each segment of *slice_*.

        Falls back to one slice-level leg when any segment lacks its own
        airports or departure time.
        """
        detailed = bool(slice_.segments) and all(
            seg.origin and seg.destination and seg.departure
            for seg in slice_.segments
        )
        if not detailed:
            return [
                f"{slice_.origin}-{slice_.destination}"
                f"@{SignatureCanonicalizer._minute(slice_.departure)}"
            ]
        return [
            f"{seg.origin}-{seg.destination}"
            f"@{SignatureCanonicalizer._minute(seg.departure)}"
            for seg in slice_.segments
        ]

    @staticmethod
    def primary_flight_number(offer: Offer) -> str:
        """First flight number of the first slice, ``""`` if unknown."""
        slices = offer.itinerary_slices
        if not slices:
            return ""
        first = slices[0]
        if first.flights and first.flights[0]:
            return first.flights[0].strip().upper()
        if first.segments:
            seg = first.segments[0]
            number = seg.flight_number.strip().upper()
            if _DIGITS_ONLY_RE.match(number):
                carrier = seg.marketing_carrier or seg.carrier_code
                return f"{carrier.upper()}{number}"
            return number
        return ""

    @staticmethod
    def airline(offer: Offer) -> str:
        """Operating airline code, from segment data or the flight number."""
        if offer.kind == "round_trip" and offer.carrier_code:
            return offer.carrier_code.upper()
        slices = offer.itinerary_slices
        if slices and slices[0].segments:
            code = slices[0].segments[0].carrier_code
            if code:
                return code.upper()
        match = _AIRLINE_PREFIX_RE.match(
            SignatureCanonicalizer.primary_flight_number(offer)
        )
        return match.group(1) if match else ""

    @staticmethod
    def _route(offer: Offer) -> tuple[str, str]:
        """First origin and the ``-``-joined destinations of every slice."""
        slices = offer.itinerary_slices
        if not slices:
            return "", ""
        return slices[0].origin, "-".join(s.destination for s in slices)

    @staticmethod
    def segment_signature(offer: Offer) -> str:
        """Airline-agnostic key of every leg's airports and departure."""
        legs: list[str] = []
        for slice_ in offer.itinerary_slices:
            legs.extend(SignatureCanonicalizer._slice_legs(slice_))
        return "|".join(legs)

    @staticmethod
    def time_option_signature(offer: Offer) -> str:
        """Airline, route, departure day and sorted cabin list."""
        slices = offer.itinerary_slices
        origin, destination = SignatureCanonicalizer._route(offer)
        day = SignatureCanonicalizer._day(
            slices[0].departure if slices else ""
        )
        cabins = sorted(
            CabinFilter.normalise_cabin(cabin)
            for slice_ in slices
            for cabin in slice_.cabins
        )
        return "|".join(
            [
                SignatureCanonicalizer.airline(offer),
                origin,
                destination,
                day,
                ",".join(cabins),
            ]
        )

    @staticmethod
    def fingerprint(offer: Offer) -> str:
        """Airline, route and per-slice stop count, e.g. ``UA|JFK|CDG|1``."""
        origin, destination = SignatureCanonicalizer._route(offer)
        stops = ",".join(
            str(len(s.stops)) for s in offer.itinerary_slices
        )
        return "|".join(
            [SignatureCanonicalizer.airline(offer), origin, destination, stops]
        )
