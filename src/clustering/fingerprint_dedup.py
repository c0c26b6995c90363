# src/clustering/fingerprint_dedup.py

"""Second merge pass inside one stop bucket, keyed by fingerprint."""

import logging

from src.clustering.signatures import SignatureCanonicalizer
from src.models.cluster import Cluster
from src.models.offer import Offer

logger = logging.getLogger("flight_offers.clustering")


class FingerprintDeduplicator:
    """Fold clusters whose primaries share airline, route and stop counts."""

    @staticmethod
    def _merge(survivor: Cluster, loser: Cluster) -> Cluster:
        """Survivor keeps its primary; the loser's members are appended."""
        similar: list[Offer] = list(survivor.similar)
        seen = {id(survivor.primary)} | {id(o) for o in similar}
        for offer in loser.members:
            if id(offer) in seen:
                continue
            seen.add(id(offer))
            similar.append(offer)
        return Cluster(
            signature=survivor.signature,
            primary=survivor.primary,
            similar=similar,
            created_index=survivor.created_index,
        )

    @staticmethod
    def deduplicate(clusters: list[Cluster]) -> tuple[list[Cluster], int]:
        """Merge same-fingerprint clusters, earliest-created surviving.

        Output keeps the position of each fingerprint's first occurrence.
        Returns the merged clusters and the count of clusters absorbed.
        """
        if not clusters:
            return [], 0

        merged: dict[str, Cluster] = {}
        absorbed = 0

        for cluster in clusters:
            key = SignatureCanonicalizer.fingerprint(cluster.primary)
            existing = merged.get(key)
            if existing is None:
                merged[key] = cluster
                continue

            if cluster.created_index < existing.created_index:
                survivor, loser = cluster, existing
            else:
                survivor, loser = existing, cluster
            merged[key] = FingerprintDeduplicator._merge(survivor, loser)
            absorbed += 1

        if absorbed:
            logger.info(
                "Fingerprint pass absorbed %d duplicate clusters", absorbed
            )

        return list(merged.values()), absorbed
