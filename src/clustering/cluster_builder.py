# src/clustering/cluster_builder.py

"""Group offers into "same physical flight" clusters."""

import logging

from src.clustering.offer_validator import OfferValidator
from src.clustering.signatures import SignatureCanonicalizer
from src.clustering.tie_break import TieBreakSorter
from src.models.cluster import Cluster
from src.models.offer import Offer

logger = logging.getLogger("flight_offers.clustering")


class _UnionFind:
    """Disjoint sets over offer positions; the lowest position is the root."""

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))

    def find(self, idx: int) -> int:
        root = idx
        while self._parent[root] != root:
            root = self._parent[root]
        # Path compression
        while self._parent[idx] != root:
            nxt = self._parent[idx]
            self._parent[idx] = root
            idx = nxt
        return root

    def union(self, a: int, b: int) -> bool:
        """Join the sets of *a* and *b*; ``False`` if already joined."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        if root_b < root_a:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        return True


class ClusterBuilder:
    """Union offers sharing a segment signature or a time-option signature.

    Pass 1 joins code-shares of one operated flight (same legs, any
    airline).  Pass 2 joins offers of one marketed flight sold on the same
    day in the same cabins, pulling together every pass-1 cluster they
    touch.  Clusters come out in order of their first member's position.
    """

    @staticmethod
    def _unique(offers: list[Offer]) -> list[Offer]:
        """Drop repeated references to the same offer object."""
        seen: set[int] = set()
        unique: list[Offer] = []
        for offer in offers:
            if id(offer) in seen:
                continue
            seen.add(id(offer))
            unique.append(offer)
        return unique

    @staticmethod
    def group(offers: object) -> list[list[Offer]]:
        """Return the final member lists, each in input order."""
        unique = ClusterBuilder._unique(OfferValidator.ensure_offers(offers))
        sets = _UnionFind(len(unique))

        first_by_segment: dict[str, int] = {}
        first_by_time_option: dict[str, int] = {}
        time_option_merges = 0

        for idx, offer in enumerate(unique):
            # Zero-slice offers stay singletons
            if not offer.itinerary_slices:
                continue

            seg_key = SignatureCanonicalizer.segment_signature(offer)
            anchor = first_by_segment.setdefault(seg_key, idx)
            if anchor != idx:
                sets.union(anchor, idx)

            time_key = SignatureCanonicalizer.time_option_signature(offer)
            anchor = first_by_time_option.setdefault(time_key, idx)
            if anchor != idx and sets.union(anchor, idx):
                time_option_merges += 1

        groups: dict[int, list[Offer]] = {}
        for idx, offer in enumerate(unique):
            groups.setdefault(sets.find(idx), []).append(offer)

        if time_option_merges:
            logger.debug(
                "Time-option pass joined %d segment clusters",
                time_option_merges,
            )
        return list(groups.values())

    @staticmethod
    def build(
        offers: object,
        point_value: float | None = None,
    ) -> list[Cluster]:
        """Cluster *offers* and pick each cluster's primary.

        Raises :class:`InvalidInputError` when *offers* is not a sequence
        of offers.
        """
        clusters: list[Cluster] = []
        for position, members in enumerate(ClusterBuilder.group(offers)):
            primary, similar = TieBreakSorter.split(members, point_value)
            first = members[0]
            signature = (
                SignatureCanonicalizer.segment_signature(first)
                if first.itinerary_slices
                else f"solo:{first.id}"
            )
            clusters.append(
                Cluster(
                    signature=signature,
                    primary=primary,
                    similar=similar,
                    created_index=position,
                )
            )

        total = sum(len(c.similar) + 1 for c in clusters)
        logger.info(
            "Clustered %d offers into %d clusters", total, len(clusters)
        )
        return clusters
