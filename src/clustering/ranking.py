# src/clustering/ranking.py

"""Tab prices, top-ranked offers and in-bucket cluster ordering."""

import logging

from src.clustering.offer_validator import OfferValidator
from src.clustering.tie_break import cash_price, total_duration
from src.config.settings import Settings
from src.models.cluster import Cluster, TabPrices

logger = logging.getLogger("flight_offers.clustering")


class RankingSelector:
    """Rank offers for the sort tabs and the auto-enrichment trigger."""

    @staticmethod
    def tab_prices(offers: object) -> TabPrices:
        """Price of the fastest offer ("best") and the cheapest ("cheap").

        One linear scan; the earliest offer wins ties.  Empty input gives
        zero prices.
        """
        items = OfferValidator.ensure_offers(offers)
        if not items:
            return TabPrices()

        fastest = items[0]
        fastest_duration = total_duration(fastest)
        cheapest_price = cash_price(fastest)

        for offer in items[1:]:
            duration = total_duration(offer)
            if duration < fastest_duration:
                fastest = offer
                fastest_duration = duration
            price = cash_price(offer)
            if price < cheapest_price:
                cheapest_price = price

        return TabPrices(
            best_price=cash_price(fastest),
            cheap_price=cheapest_price,
        )

    @staticmethod
    def top_ranked_ids(
        offers: object,
        limit: int | None = None,
    ) -> frozenset[str]:
        """Ids of the first *limit* distinct offers by (price, duration).

        *limit* defaults to ``Settings.TOP_RANKED_COUNT``.  Offers without
        an id cannot be enriched and are skipped.
        """
        items = OfferValidator.ensure_offers(offers)
        count = Settings.TOP_RANKED_COUNT if limit is None else limit

        ranked = sorted(
            items, key=lambda o: (cash_price(o), total_duration(o))
        )
        picked: list[str] = []
        for offer in ranked:
            if len(picked) >= count:
                break
            if offer.id and offer.id not in picked:
                picked.append(offer.id)

        if picked:
            logger.debug("Top-ranked offers: %s", ", ".join(picked))
        return frozenset(picked)

    @staticmethod
    def sort_clusters(
        clusters: list[Cluster],
        sort_mode: str = Settings.DEFAULT_SORT_MODE,
    ) -> list[Cluster]:
        """Order clusters by primary price (``cheap``) or duration (``best``).

        Raises ``ValueError`` for an unknown sort mode.
        """
        if sort_mode == "cheap":
            return sorted(clusters, key=lambda c: cash_price(c.primary))
        if sort_mode == "best":
            return sorted(clusters, key=lambda c: total_duration(c.primary))
        msg = f"Unknown sort mode: {sort_mode!r}"
        raise ValueError(msg)
