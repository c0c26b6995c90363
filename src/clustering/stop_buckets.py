# src/clustering/stop_buckets.py

"""Partition clusters into stop-count sections (nonstop first)."""

import logging

from src.config.settings import Settings
from src.models.cluster import Cluster, StopBucket
from src.models.offer import Offer

logger = logging.getLogger("flight_offers.clustering")


class StopBucketAggregator:
    """Bucket clusters by their primary offer's stop count."""

    @staticmethod
    def stop_count(
        offer: Offer,
        outbound_only: bool | None = None,
    ) -> int:
        """Largest per-slice count of technical stops.

        Round-trip bundles count the outbound slice only unless
        *outbound_only* (default ``Settings.BUNDLE_STOPS_OUTBOUND_ONLY``)
        is false.
        """
        if outbound_only is None:
            outbound_only = Settings.BUNDLE_STOPS_OUTBOUND_ONLY

        if offer.kind == "round_trip" and outbound_only:
            return len(offer.outbound.stops)

        slices = offer.itinerary_slices
        if not slices:
            return 0
        return max(len(s.stops) for s in slices)

    @staticmethod
    def aggregate(
        clusters: list[Cluster],
        outbound_only: bool | None = None,
    ) -> list[StopBucket]:
        """Return buckets sorted ascending by stop count.

        Cluster order inside a bucket follows the input order.
        """
        buckets: dict[int, StopBucket] = {}
        for cluster in clusters:
            stops = StopBucketAggregator.stop_count(
                cluster.primary, outbound_only
            )
            bucket = buckets.get(stops)
            if bucket is None:
                bucket = StopBucket(stop_count=stops)
                buckets[stops] = bucket
            bucket.add(cluster)

        ordered = [buckets[key] for key in sorted(buckets)]
        logger.debug(
            "Stop buckets: %s",
            ", ".join(
                f"{b.stop_count}={len(b.clusters)}" for b in ordered
            ),
        )
        return ordered

    @staticmethod
    def resolve_active_stop(
        buckets: list[StopBucket],
        previous: int | None = None,
    ) -> int | None:
        """Keep *previous* if it still has a bucket, else the smallest key.

        Returns ``None`` only when there are no buckets at all.
        """
        keys = [b.stop_count for b in buckets]
        if not keys:
            return None
        if previous is not None and previous in keys:
            return previous
        fallback = min(keys)
        if previous is not None:
            logger.debug(
                "Active stop bucket %d gone, falling back to %d",
                previous,
                fallback,
            )
        return fallback
