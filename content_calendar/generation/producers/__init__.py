"""
Content Producers

Each producer is one strategy for turning a GenerationRequest into article
text. ContentGenerator tries them in order; the last one must work offline.
"""

from content_calendar.generation.producers.base import ContentProducer
from content_calendar.generation.producers.gemini import GeminiProducer
from content_calendar.generation.producers.template import TemplateProducer

# Registry: producer_name → class
PRODUCER_REGISTRY = {
    "gemini": GeminiProducer,
    "template": TemplateProducer,
}


def get_producer(producer_name: str, **kwargs) -> ContentProducer:
    """Factory: instantiate a producer by name."""
    cls = PRODUCER_REGISTRY.get(producer_name)
    if not cls:
        raise ValueError(f"Unknown producer: {producer_name}")
    return cls(**kwargs)
