# src/clustering/exceptions.py

"""Exceptions raised by the flight_offers core."""


class FlightOffersError(Exception):
    """Base class for errors raised by flight_offers."""


class InvalidInputError(FlightOffersError, ValueError):
    """A caller handed the pipeline something that is not a list of offers."""


class CacheClosedError(FlightOffersError, RuntimeError):
    """A result cache was used after :meth:`ResultCache.close`."""
