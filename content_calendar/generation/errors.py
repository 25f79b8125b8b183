"""Exceptions raised by content producers."""

from typing import List, Tuple


class ProducerError(Exception):
    """Base error for content producer failures."""


class GeneratorConfigError(ProducerError):
    """Missing or rejected credentials / configuration."""


class QuotaExceededError(ProducerError):
    """The upstream API refused the call because of usage limits."""


class TransportError(ProducerError):
    """Network or service availability failure talking to the upstream API."""


class EmptyResponseError(ProducerError):
    """The upstream API answered with no usable text."""


class AllProducersFailedError(ProducerError):
    """Every producer in a chain failed for the same request."""

    def __init__(self, errors: List[Tuple[str, Exception]]):
        self.errors = errors
        details = "; ".join(f"{name}: {exc}" for name, exc in errors)
        super().__init__(f"Failed to generate content with all producers ({details})")
