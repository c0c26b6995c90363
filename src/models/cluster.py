# src/models/cluster.py

"""Derived presentation views: clusters, stop buckets and tab prices."""

from dataclasses import dataclass, field

from src.models.offer import Offer


@dataclass(eq=False)
class Cluster:
    """A primary offer plus its same-flight, different-fare siblings."""

    signature: str
    primary: Offer
    similar: list[Offer] = field(default_factory=lambda: list[Offer]())
    created_index: int = 0

    @property
    def members(self) -> list[Offer]:
        return [self.primary, *self.similar]

    @property
    def cheapest_price(self) -> float:
        return min(offer.display_total for offer in self.members)

    def to_dict(self) -> dict[str, object]:
        return {
            "primary": self.primary.id,
            "similar": [offer.id for offer in self.similar],
        }


@dataclass(eq=False)
class StopBucket:
    """All clusters sharing one stop count.

    ``cheapest_price`` is a running minimum updated by :meth:`add`; it is
    never recomputed by scanning the members.
    """

    stop_count: int
    clusters: list[Cluster] = field(
        default_factory=lambda: list[Cluster]()
    )
    cheapest_price: float = float("inf")

    def add(self, cluster: Cluster) -> None:
        """Append *cluster* and fold its member prices into the minimum."""
        self.clusters.append(cluster)
        for offer in cluster.members:
            if offer.display_total < self.cheapest_price:
                self.cheapest_price = offer.display_total

    @property
    def offer_count(self) -> int:
        return sum(len(c.similar) + 1 for c in self.clusters)

    def to_dict(self) -> dict[str, object]:
        return {
            "stop_count": self.stop_count,
            "cheapest_price": (
                self.cheapest_price if self.clusters else 0.0
            ),
            "clusters": [c.to_dict() for c in self.clusters],
        }


@dataclass
class TabPrices:
    """Prices shown on the "best" (fastest) and "cheap" sort tabs."""

    best_price: float = 0.0
    cheap_price: float = 0.0


@dataclass
class CabinPriceRange:
    """Min/max price and offer count for one cabin tab."""

    min_price: float = 0.0
    max_price: float = 0.0
    count: int = 0
