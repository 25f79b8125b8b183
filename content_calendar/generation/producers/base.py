"""
Base class for content producers.

A producer turns a GenerationRequest into a GeneratedContent. Producers are
interchangeable strategies that ContentGenerator tries in order.
"""

from abc import ABC, abstractmethod

from content_calendar.generation.models import GenerationRequest, GeneratedContent
from content_calendar.generation.text import count_words, estimate_read_time, extract_keywords


class ContentProducer(ABC):
    """Base class for all content producers."""

    producer_name: str = "base_producer"
    description: str = "Base producer"
    requires_network: bool = True

    @abstractmethod
    async def produce(self, request: GenerationRequest) -> GeneratedContent:
        """
        Produce an article body for `request`.

        Raises:
            ProducerError (or any other exception) when no content could be made.
        """

    def build_content(self, request: GenerationRequest, body: str, measured: str = None) -> GeneratedContent:
        """Wrap `body` with its derived fields; metrics are taken from `measured` when given."""
        word_count = count_words(measured if measured is not None else body)
        return GeneratedContent(
            title=request.title,
            content=body,
            word_count=word_count,
            estimated_read_time=estimate_read_time(word_count),
            seo_keywords=extract_keywords(request.title, request.topic),
            producer=self.producer_name,
        )
