# src/clustering/offer_validator.py

"""Boundary check for offer collections entering the pipeline."""

import logging
from collections.abc import Mapping, Sequence

from src.clustering.exceptions import InvalidInputError
from src.models.offer import OFFER_TYPES, Offer

logger = logging.getLogger("flight_offers.clustering")


class OfferValidator:
    """Reject malformed offer collections instead of masking them."""

    @staticmethod
    def ensure_offers(offers: object) -> list[Offer]:
        """Return *offers* as a list, or raise :class:`InvalidInputError`.

        ``None``, strings, mappings and other non-sequences are rejected,
        as is any element that is not an offer.  An empty sequence is
        valid and yields an empty list.
        """
        if offers is None:
            raise InvalidInputError("offers must be a sequence, got None")
        if isinstance(offers, (str, bytes, Mapping)) or not isinstance(
            offers, Sequence
        ):
            raise InvalidInputError(
                f"offers must be a sequence, got {type(offers).__name__}"
            )

        for idx, offer in enumerate(offers):
            if not isinstance(offer, OFFER_TYPES):
                logger.error(
                    "Rejected offer list: element %d is %s",
                    idx,
                    type(offer).__name__,
                )
                raise InvalidInputError(
                    f"element {idx} is not an offer "
                    f"({type(offer).__name__})"
                )

        return list(offers)
