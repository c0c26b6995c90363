# tests/test_ranking.py

"""Tests for RankingSelector tab prices, top-ranked ids and sort modes."""

import unittest

from src.clustering.exceptions import InvalidInputError
from src.clustering.ranking import RankingSelector
from src.models.cluster import Cluster
from src.models.offer import SingleItinerary, Slice


def _make(offer_id: str, duration: int, price: float) -> SingleItinerary:
    return SingleItinerary(
        id=offer_id,
        slices=[Slice(duration=duration, flights=["UA1"])],
        display_total=price,
    )


class TestTabPrices(unittest.TestCase):
    """RankingSelector.tab_prices behaviour."""

    def test_empty_gives_zero(self) -> None:
        prices = RankingSelector.tab_prices([])
        self.assertEqual(prices.best_price, 0)
        self.assertEqual(prices.cheap_price, 0)

    def test_best_is_fastest_cheap_is_cheapest(self) -> None:
        offers = [
            _make("slow_cheap", 600, 300.0),
            _make("fast", 280, 900.0),
            _make("mid", 400, 500.0),
        ]
        prices = RankingSelector.tab_prices(offers)
        self.assertEqual(prices.best_price, 900.0)
        self.assertEqual(prices.cheap_price, 300.0)

    def test_duration_tie_keeps_first(self) -> None:
        """Equal durations: the earlier offer's price is "best"."""
        offers = [_make("first", 300, 700.0), _make("second", 300, 200.0)]
        self.assertEqual(RankingSelector.tab_prices(offers).best_price, 700.0)

    def test_rejects_none(self) -> None:
        with self.assertRaises(InvalidInputError):
            RankingSelector.tab_prices(None)


class TestTopRanked(unittest.TestCase):
    """RankingSelector.top_ranked_ids behaviour."""

    def test_empty(self) -> None:
        self.assertEqual(RankingSelector.top_ranked_ids([]), frozenset())

    def test_picks_five_cheapest(self) -> None:
        offers = [_make(f"o{i}", 300, 100.0 * (10 - i)) for i in range(10)]
        self.assertEqual(
            RankingSelector.top_ranked_ids(offers),
            frozenset({"o9", "o8", "o7", "o6", "o5"}),
        )

    def test_duration_breaks_price_ties(self) -> None:
        offers = [
            _make("long", 500, 100.0),
            _make("short", 200, 100.0),
            _make("other", 100, 150.0),
        ]
        self.assertEqual(
            RankingSelector.top_ranked_ids(offers, limit=1),
            frozenset({"short"}),
        )

    def test_distinct_identities(self) -> None:
        """Duplicate ids count once toward the limit."""
        offers = [
            _make("dup", 300, 100.0),
            _make("dup", 310, 100.0),
            _make("b", 300, 200.0),
            _make("c", 300, 300.0),
        ]
        self.assertEqual(
            RankingSelector.top_ranked_ids(offers, limit=3),
            frozenset({"dup", "b", "c"}),
        )

    def test_offers_without_id_skipped(self) -> None:
        """Id-less offers never take a slot from identifiable ones."""
        offers = [
            _make("", 300, 50.0),
            _make("", 300, 60.0),
            _make("a", 300, 100.0),
            _make("b", 300, 200.0),
        ]
        self.assertEqual(
            RankingSelector.top_ranked_ids(offers, limit=2),
            frozenset({"a", "b"}),
        )

    def test_fewer_than_limit(self) -> None:
        offers = [_make("a", 300, 1.0), _make("b", 300, 2.0)]
        self.assertEqual(
            RankingSelector.top_ranked_ids(offers), frozenset({"a", "b"})
        )


class TestSortClusters(unittest.TestCase):
    """RankingSelector.sort_clusters behaviour."""

    def setUp(self) -> None:
        self.clusters = [
            Cluster(signature="x", primary=_make("x", 500, 200.0)),
            Cluster(signature="y", primary=_make("y", 300, 400.0)),
            Cluster(signature="z", primary=_make("z", 300, 100.0)),
        ]

    def test_cheap_orders_by_price(self) -> None:
        ordered = RankingSelector.sort_clusters(self.clusters, "cheap")
        self.assertEqual([c.primary.id for c in ordered], ["z", "x", "y"])

    def test_best_orders_by_duration_stably(self) -> None:
        ordered = RankingSelector.sort_clusters(self.clusters, "best")
        self.assertEqual([c.primary.id for c in ordered], ["y", "z", "x"])

    def test_unknown_mode_raises(self) -> None:
        with self.assertRaises(ValueError):
            RankingSelector.sort_clusters(self.clusters, "fastest")


if __name__ == "__main__":
    unittest.main()
