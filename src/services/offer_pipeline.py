# src/services/offer_pipeline.py

"""Orchestrates clustering, bucketing and ranking of one result set."""

import logging
from dataclasses import dataclass, field

from src.clustering.cabin_filter import CabinFilter
from src.clustering.cluster_builder import ClusterBuilder
from src.clustering.fingerprint_dedup import FingerprintDeduplicator
from src.clustering.offer_validator import OfferValidator
from src.clustering.ranking import RankingSelector
from src.clustering.stop_buckets import StopBucketAggregator
from src.config.settings import Settings
from src.models.cluster import CabinPriceRange, StopBucket, TabPrices
from src.models.offer import Offer

logger = logging.getLogger("flight_offers.pipeline")


@dataclass
class PipelineResult:
    """Everything the presentation layer needs for one filter state."""

    buckets: list[StopBucket] = field(
        default_factory=lambda: list[StopBucket]()
    )
    tab_prices: TabPrices = field(default_factory=TabPrices)
    auto_enrich_ids: frozenset[str] = frozenset()
    active_stop: int | None = None
    cabin_ranges: dict[str, CabinPriceRange] = field(
        default_factory=lambda: dict[str, CabinPriceRange]()
    )
    total_offers: int = 0
    excluded_count: int = 0
    merged_count: int = 0


class OfferPipeline:
    """Run the full offer chain for a cabin and sort-mode selection.

    Recomputes from scratch on every call, so it is safe to rerun
    whenever a page of results arrives or a filter changes.
    """

    def __init__(
        self,
        point_value: float | None = None,
        top_count: int | None = None,
        bundle_outbound_only: bool | None = None,
    ) -> None:
        self.point_value = (
            Settings.POINT_VALUE_PER_MILE
            if point_value is None
            else point_value
        )
        self.top_count = (
            Settings.TOP_RANKED_COUNT if top_count is None else top_count
        )
        self.bundle_outbound_only = (
            Settings.BUNDLE_STOPS_OUTBOUND_ONLY
            if bundle_outbound_only is None
            else bundle_outbound_only
        )

    def run(
        self,
        offers: object,
        cabin: str | None = None,
        sort_mode: str = Settings.DEFAULT_SORT_MODE,
        active_stop: int | None = None,
    ) -> PipelineResult:
        """Cluster, bucket and rank *offers*.

        Raises :class:`InvalidInputError` when *offers* is not a sequence
        of offers and ``ValueError`` for an unknown *sort_mode*.
        """
        if sort_mode not in Settings.SORT_MODES:
            msg = f"Unknown sort mode: {sort_mode!r}"
            raise ValueError(msg)

        all_offers = OfferValidator.ensure_offers(offers)
        result = PipelineResult(
            total_offers=len(all_offers),
            cabin_ranges=CabinFilter.price_ranges(all_offers),
        )

        filtered: list[Offer]
        filtered, result.excluded_count = CabinFilter.filter_by_cabin(
            all_offers, cabin
        )

        clusters = ClusterBuilder.build(filtered, self.point_value)
        buckets = StopBucketAggregator.aggregate(
            clusters, self.bundle_outbound_only
        )
        for bucket in buckets:
            deduped, merged = FingerprintDeduplicator.deduplicate(
                bucket.clusters
            )
            result.merged_count += merged
            bucket.clusters = RankingSelector.sort_clusters(
                deduped, sort_mode
            )

        result.buckets = buckets
        result.active_stop = StopBucketAggregator.resolve_active_stop(
            buckets, active_stop
        )
        result.tab_prices = RankingSelector.tab_prices(filtered)
        result.auto_enrich_ids = RankingSelector.top_ranked_ids(
            filtered, self.top_count
        )

        logger.info(
            "Pipeline: %d offers, %d after cabin filter, %d buckets, "
            "%d fingerprint merges",
            result.total_offers,
            len(filtered),
            len(buckets),
            result.merged_count,
        )
        return result

    @staticmethod
    def presentation(result: PipelineResult) -> list[dict[str, object]]:
        """Buckets as ``{stop_count, cheapest_price, clusters}`` dicts."""
        return [bucket.to_dict() for bucket in result.buckets]
