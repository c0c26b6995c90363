# src/models/offer_parser.py

"""Convert raw search-result records into typed offers.

The search collaborator returns loosely shaped camelCase records.  This
is the one place that inspects their shape: a record carrying an
``outboundSlice`` is a round-trip bundle, anything else a single
itinerary.  Missing or malformed fields fall back to defaults so a
partially enriched record still clusters.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from src.clustering.exceptions import InvalidInputError
from src.models.offer import (
    MileageCandidate,
    Offer,
    ReturnOption,
    RoundTripBundle,
    Segment,
    SingleItinerary,
    Slice,
)

logger = logging.getLogger("flight_offers.models")

_HOURS_RE = re.compile(r"(\d+)H")
_MINUTES_RE = re.compile(r"(\d+)M")
_PRICE_PREFIX_RE = re.compile(r"[A-Z]+\s*")


def parse_duration(value: Any) -> int:
    """Minutes from an int, a digit string or ``PT5H30M``-style text."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    if isinstance(value, str):
        text = value.strip().upper()
        if text.isdigit():
            return int(text)
        hours = _HOURS_RE.search(text)
        minutes = _MINUTES_RE.search(text)
        return (int(hours.group(1)) * 60 if hours else 0) + (
            int(minutes.group(1)) if minutes else 0
        )
    return 0


def parse_amount(value: Any) -> float:
    """Float from a number or a currency-prefixed string like ``USD 5.60``."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        cleaned = _PRICE_PREFIX_RE.sub("", value.upper()).strip()
        try:
            return float(cleaned.replace(",", ""))
        except ValueError:
            return 0.0
    return 0.0


def _optional_amount(value: Any) -> float | None:
    return None if value is None else parse_amount(value)


def _code(value: Any) -> str:
    """Airport/carrier code from ``{"code": ...}``, ``{"iataCode": ...}`` or a str."""
    if isinstance(value, Mapping):
        return str(value.get("code") or value.get("iataCode") or "")
    if isinstance(value, str):
        return value
    return ""


def _list(value: Any) -> list[Any]:
    """*value* when it is a JSON array, otherwise an empty list."""
    return value if isinstance(value, list) else []


def _str_list(values: Any) -> list[str]:
    return [_code(v) for v in _list(values) if _code(v)]


def _candidates(
    breakdowns: list[Any], flight_number: str
) -> list[MileageCandidate]:
    """Mileage candidates of the breakdown entry for *flight_number*."""
    candidates: list[MileageCandidate] = []
    for entry in breakdowns:
        if not isinstance(entry, Mapping):
            continue
        if entry.get("flightNumber", "") != flight_number:
            continue
        matching = _list(entry.get("allMatchingFlights"))
        for match in matching:
            if not isinstance(match, Mapping):
                continue
            candidates.append(
                MileageCandidate(
                    mileage=parse_amount(match.get("mileage")),
                    mileage_price=parse_amount(match.get("mileagePrice")),
                    carrier_code=str(
                        match.get("carrierCode")
                        or match.get("operatingCarrier")
                        or ""
                    ),
                    exact_match=bool(match.get("exactMatch", False)),
                )
            )
        if not matching and entry.get("matched"):
            candidates.append(
                MileageCandidate(
                    mileage=parse_amount(entry.get("mileage")),
                    mileage_price=parse_amount(entry.get("mileagePrice")),
                    carrier_code=str(entry.get("carrier") or ""),
                    exact_match=bool(entry.get("exactMatch", False)),
                )
            )
    return candidates


def _parse_segment(
    raw: Mapping[str, Any],
    fallback_flight: str,
    breakdowns: list[Any],
) -> Segment:
    carrier = raw.get("carrier") or {}
    pricings = _list(raw.get("pricings"))
    booking_class = ""
    if pricings and isinstance(pricings[0], Mapping):
        booking_class = str(pricings[0].get("bookingClass") or "")

    flight_number = str(raw.get("flightNumber") or fallback_flight or "")
    return Segment(
        carrier_code=_code(carrier),
        carrier_name=(
            str(carrier.get("name") or "")
            if isinstance(carrier, Mapping)
            else ""
        ),
        marketing_carrier=str(raw.get("marketingCarrier") or ""),
        flight_number=flight_number,
        booking_class=booking_class,
        origin=_code(raw.get("origin")),
        destination=_code(raw.get("destination")),
        departure=str(raw.get("departure") or raw.get("departureTime") or ""),
        breakdown=_candidates(breakdowns, flight_number),
    )


def parse_slice(raw: Any) -> Slice:
    """Build a :class:`Slice` from a raw slice record (best effort)."""
    if not isinstance(raw, Mapping):
        return Slice()

    flights = [str(f) for f in _list(raw.get("flights")) if f]
    breakdowns = _list(raw.get("mileageBreakdown"))
    segments = [
        _parse_segment(
            seg,
            flights[idx] if idx < len(flights) else "",
            breakdowns,
        )
        for idx, seg in enumerate(_list(raw.get("segments")))
        if isinstance(seg, Mapping)
    ]
    return Slice(
        origin=_code(raw.get("origin")),
        destination=_code(raw.get("destination")),
        departure=str(raw.get("departure") or ""),
        arrival=str(raw.get("arrival") or ""),
        duration=parse_duration(raw.get("duration")),
        stops=_str_list(raw.get("stops")),
        flights=flights,
        cabins=[str(c) for c in _list(raw.get("cabins")) if c],
        segments=segments,
        mileage=_optional_amount(raw.get("mileage")),
        mileage_price=_optional_amount(raw.get("mileagePrice")),
    )


def _parse_bundle(raw: Mapping[str, Any]) -> RoundTripBundle:
    options = [
        ReturnOption(
            return_slice=parse_slice(opt.get("returnSlice")),
            display_total=parse_amount(opt.get("displayTotal")),
            total_amount=parse_amount(opt.get("totalAmount")),
            original_offer_id=str(opt.get("originalFlightId") or ""),
        )
        for opt in _list(raw.get("returnOptions"))
        if isinstance(opt, Mapping)
    ]
    carrier = raw.get("carrier") or {}
    offer_id = raw.get("id") or (
        options[0].original_offer_id if options else ""
    )
    return RoundTripBundle(
        id=str(offer_id),
        outbound=parse_slice(raw.get("outboundSlice")),
        return_options=options,
        currency=str(raw.get("currency") or "USD"),
        carrier_code=_code(carrier),
        carrier_name=(
            str(carrier.get("name") or "")
            if isinstance(carrier, Mapping)
            else ""
        ),
    )


def parse_offer(raw: Any) -> Offer:
    """Build one offer; raises :class:`InvalidInputError` for non-mappings."""
    if not isinstance(raw, Mapping):
        raise InvalidInputError(
            f"offer record must be a mapping, got {type(raw).__name__}"
        )

    if "outboundSlice" in raw:
        return _parse_bundle(raw)

    return SingleItinerary(
        id=str(raw.get("id") or ""),
        slices=[parse_slice(s) for s in _list(raw.get("slices"))],
        display_total=parse_amount(raw.get("displayTotal")),
        total_amount=parse_amount(raw.get("totalAmount")),
        currency=str(raw.get("currency") or "USD"),
        total_mileage=_optional_amount(raw.get("totalMileage")),
        total_mileage_price=_optional_amount(raw.get("totalMileagePrice")),
    )


def parse_offers(payload: Any) -> list[Offer]:
    """Parse a list of records or a ``solutionList`` search response."""
    records = payload
    if isinstance(payload, Mapping):
        solution_list = payload.get("solutionList") or {}
        records = (
            solution_list.get("solutions")
            if isinstance(solution_list, Mapping)
            else None
        )
        if records is None:
            records = []
    if not isinstance(records, list):
        raise InvalidInputError(
            f"expected a list of offers, got {type(records).__name__}"
        )

    offers = [parse_offer(record) for record in records]
    logger.debug("Parsed %d offer records", len(offers))
    return offers
