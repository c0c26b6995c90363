# tests/test_signatures.py

"""Tests for SignatureCanonicalizer clustering keys."""

import copy
import unittest

from src.clustering.signatures import SignatureCanonicalizer
from src.models.offer import (
    ReturnOption,
    RoundTripBundle,
    Segment,
    SingleItinerary,
    Slice,
)


def _segment(
    origin: str,
    destination: str,
    departure: str,
    carrier: str = "UA",
    number: str = "100",
) -> Segment:
    return Segment(
        carrier_code=carrier,
        flight_number=number,
        origin=origin,
        destination=destination,
        departure=departure,
    )


def _slice(
    origin: str = "JFK",
    destination: str = "CDG",
    departure: str = "2026-11-02T18:05:00-05:00",
    flights: list[str] | None = None,
    stops: list[str] | None = None,
    cabins: list[str] | None = None,
    segments: list[Segment] | None = None,
) -> Slice:
    return Slice(
        origin=origin,
        destination=destination,
        departure=departure,
        duration=420,
        flights=flights if flights is not None else ["UA100"],
        stops=stops or [],
        cabins=cabins if cabins is not None else ["COACH"],
        segments=segments or [],
    )


class TestSegmentSignature(unittest.TestCase):
    """segment_signature behaviour."""

    def test_uses_segment_legs(self) -> None:
        """Every segment contributes origin-destination@minute."""
        offer = SingleItinerary(
            id="a",
            slices=[
                _slice(
                    segments=[
                        _segment("JFK", "ORD", "2026-11-02T08:00:41-05:00"),
                        _segment("ORD", "CDG", "2026-11-02T11:30:00-06:00"),
                    ]
                )
            ],
        )
        self.assertEqual(
            SignatureCanonicalizer.segment_signature(offer),
            "JFK-ORD@2026-11-02T08:00|ORD-CDG@2026-11-02T11:30",
        )

    def test_airline_agnostic(self) -> None:
        """Code-shares on different carriers share the signature."""
        ua = SingleItinerary(
            id="ua",
            slices=[_slice(segments=[_segment("JFK", "CDG", "2026-11-02T18:05")])],
        )
        af = SingleItinerary(
            id="af",
            slices=[
                _slice(
                    flights=["AF3612"],
                    segments=[
                        _segment("JFK", "CDG", "2026-11-02T18:05", "AF", "3612")
                    ],
                )
            ],
        )
        self.assertEqual(
            SignatureCanonicalizer.segment_signature(ua),
            SignatureCanonicalizer.segment_signature(af),
        )

    def test_falls_back_to_slice_fields(self) -> None:
        """Segments without airports use the slice-level leg."""
        offer = SingleItinerary(
            id="a", slices=[_slice(segments=[Segment(carrier_code="UA")])]
        )
        self.assertEqual(
            SignatureCanonicalizer.segment_signature(offer),
            "JFK-CDG@2026-11-02T18:05",
        )

    def test_zero_slice_offer_gives_empty_key(self) -> None:
        """No slices, no legs, no exception."""
        offer = SingleItinerary(id="empty")
        self.assertEqual(SignatureCanonicalizer.segment_signature(offer), "")

    def test_does_not_mutate_offer(self) -> None:
        """Computing keys leaves the offer untouched."""
        offer = SingleItinerary(
            id="a",
            slices=[_slice(cabins=["first", "ECONOMY"])],
            display_total=99.0,
        )
        before = copy.deepcopy(offer)
        SignatureCanonicalizer.segment_signature(offer)
        SignatureCanonicalizer.time_option_signature(offer)
        SignatureCanonicalizer.fingerprint(offer)
        self.assertEqual(offer.slices, before.slices)
        self.assertEqual(offer.display_total, before.display_total)


class TestTimeOptionSignature(unittest.TestCase):
    """time_option_signature behaviour."""

    def test_day_granularity_and_sorted_cabins(self) -> None:
        """Departure is cut to the day and cabins are normalised, sorted."""
        offer = SingleItinerary(
            id="a",
            slices=[_slice(cabins=["BUSINESS", "economy"])],
        )
        self.assertEqual(
            SignatureCanonicalizer.time_option_signature(offer),
            "UA|JFK|CDG|2026-11-02|BUSINESS,COACH",
        )

    def test_same_day_different_times_match(self) -> None:
        """Two departures on one day share the key."""
        morning = SingleItinerary(
            id="m", slices=[_slice(departure="2026-11-02T08:00:00-05:00")]
        )
        evening = SingleItinerary(
            id="e", slices=[_slice(departure="2026-11-02T21:15:00-05:00")]
        )
        self.assertEqual(
            SignatureCanonicalizer.time_option_signature(morning),
            SignatureCanonicalizer.time_option_signature(evening),
        )

    def test_missing_everything_degrades(self) -> None:
        """An offer without slices yields placeholders only."""
        self.assertEqual(
            SignatureCanonicalizer.time_option_signature(
                SingleItinerary(id="x")
            ),
            "||||",
        )


class TestFingerprint(unittest.TestCase):
    """fingerprint and airline derivation."""

    def test_one_stop_fingerprint(self) -> None:
        """Airline, route and stop count only."""
        offer = SingleItinerary(
            id="a", slices=[_slice(stops=["ORD"], flights=["UA100", "UA57"])]
        )
        self.assertEqual(
            SignatureCanonicalizer.fingerprint(offer), "UA|JFK|CDG|1"
        )

    def test_multi_slice_destinations_and_stops(self) -> None:
        """Each slice adds its destination and stop count."""
        offer = SingleItinerary(
            id="rt",
            slices=[
                _slice(stops=["ORD"]),
                _slice(origin="CDG", destination="JFK"),
            ],
        )
        self.assertEqual(
            SignatureCanonicalizer.fingerprint(offer), "UA|JFK|CDG-JFK|1,0"
        )

    def test_airline_prefers_segment_carrier(self) -> None:
        """Operating carrier on the segment beats the flight number prefix."""
        offer = SingleItinerary(
            id="a",
            slices=[
                _slice(
                    flights=["LH9001"],
                    segments=[_segment("JFK", "CDG", "2026-11-02T18:05")],
                )
            ],
        )
        self.assertEqual(SignatureCanonicalizer.airline(offer), "UA")

    def test_airline_from_flight_number(self) -> None:
        """Without segments, the alphabetic flight prefix is used."""
        offer = SingleItinerary(id="a", slices=[_slice(flights=["DL402"])])
        self.assertEqual(SignatureCanonicalizer.airline(offer), "DL")

    def test_bundle_uses_outbound_and_first_return(self) -> None:
        """Round-trip bundles key on outbound plus first return option."""
        bundle = RoundTripBundle(
            id="b",
            outbound=_slice(flights=["AA44"]),
            return_options=[
                ReturnOption(
                    return_slice=_slice(
                        origin="CDG", destination="JFK", stops=["LHR"]
                    ),
                    display_total=700.0,
                )
            ],
            carrier_code="AA",
        )
        self.assertEqual(
            SignatureCanonicalizer.fingerprint(bundle), "AA|JFK|CDG-JFK|0,1"
        )


class TestPrimaryFlightNumber(unittest.TestCase):
    """primary_flight_number derivation."""

    def test_from_slice_flights(self) -> None:
        offer = SingleItinerary(id="a", slices=[_slice(flights=["ua100"])])
        self.assertEqual(
            SignatureCanonicalizer.primary_flight_number(offer), "UA100"
        )

    def test_digits_get_marketing_prefix(self) -> None:
        """A bare numeric segment number is prefixed with its carrier."""
        offer = SingleItinerary(
            id="a",
            slices=[
                _slice(
                    flights=[],
                    segments=[
                        Segment(
                            carrier_code="UA",
                            marketing_carrier="LH",
                            flight_number="9001",
                        )
                    ],
                )
            ],
        )
        self.assertEqual(
            SignatureCanonicalizer.primary_flight_number(offer), "LH9001"
        )

    def test_empty_when_unknown(self) -> None:
        self.assertEqual(
            SignatureCanonicalizer.primary_flight_number(
                SingleItinerary(id="x")
            ),
            "",
        )


if __name__ == "__main__":
    unittest.main()
