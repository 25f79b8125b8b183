"""Ordered producer chain with fallback."""

import logging
from typing import List, Optional, Sequence, Tuple

from content_calendar.config import GEMINI_API_KEY, GEMINI_MODEL
from content_calendar.generation.errors import AllProducersFailedError
from content_calendar.generation.models import GenerationRequest, GeneratedContent
from content_calendar.generation.producers import ContentProducer, get_producer

logger = logging.getLogger(__name__)


class ContentGenerator:
    """
    Tries each producer in order and returns the first result.

    The last producer must not depend on the network so that well-formed
    requests always terminate with content.
    """

    def __init__(self, producers: Sequence[ContentProducer]):
        if not producers:
            raise ValueError("ContentGenerator needs at least one producer")
        if producers[-1].requires_network:
            raise ValueError(
                f"Last producer '{producers[-1].producer_name}' requires the network; "
                "the chain must end with an offline producer"
            )
        self.producers = list(producers)

    def get(self, producer_name: str) -> Optional[ContentProducer]:
        for producer in self.producers:
            if producer.producer_name == producer_name:
                return producer
        return None

    async def generate(self, request: GenerationRequest) -> GeneratedContent:
        errors: List[Tuple[str, Exception]] = []
        for index, producer in enumerate(self.producers):
            try:
                content = await producer.produce(request)
            except Exception as exc:
                errors.append((producer.producer_name, exc))
                if index < len(self.producers) - 1:
                    logger.warning(
                        "Producer '%s' failed for %r, falling back: %s",
                        producer.producer_name, request.title, exc,
                    )
                continue
            if errors:
                logger.info("Used '%s' producer as fallback for %r", producer.producer_name, request.title)
            return content

        logger.error("All producers failed for %r", request.title)
        raise AllProducersFailedError(errors)


def build_default_generator(api_key: Optional[str] = GEMINI_API_KEY, model_name: str = GEMINI_MODEL) -> ContentGenerator:
    """Gemini first, template fallback last."""
    return ContentGenerator([
        get_producer("gemini", api_key=api_key, model_name=model_name),
        get_producer("template"),
    ])
