"""Gemini Producer - writes articles and calendar titles with Google Gemini."""

import logging
import re
from typing import Optional, List

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from content_calendar.generation.errors import (
    ProducerError,
    GeneratorConfigError,
    QuotaExceededError,
    TransportError,
    EmptyResponseError,
)
from content_calendar.generation.models import GenerationRequest, GeneratedContent
from content_calendar.generation.producers.base import ContentProducer

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-1.5-flash"

_NUMBERED_LINE_RE = re.compile(r"^\s*\d+\.\s*(.+)$")
_QUOTES = "\"'"


def fallback_title(topic: str, day_number: int) -> str:
    return f"{topic}: Day {day_number} Guide"


def parse_numbered_titles(text: str) -> List[str]:
    """Pull titles out of a "1. Title" per line response."""
    titles = []
    for line in text.strip().splitlines():
        match = _NUMBERED_LINE_RE.match(line)
        if match:
            title = match.group(1).strip().strip(_QUOTES).strip()
            if title:
                titles.append(title)
    return titles


def _classify_error(exc: Exception) -> ProducerError:
    """Map a Gemini / transport failure onto the producer error taxonomy."""
    if isinstance(exc, ProducerError):
        return exc
    if isinstance(exc, (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied)):
        return GeneratorConfigError(f"Gemini API key is invalid or not permitted: {exc}")
    if isinstance(exc, (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests)):
        return QuotaExceededError(f"Gemini API quota exceeded: {exc}")
    if isinstance(exc, (
        google_exceptions.ServiceUnavailable,
        google_exceptions.DeadlineExceeded,
        google_exceptions.RetryError,
        ConnectionError,
        TimeoutError,
    )):
        return TransportError(f"Network error while connecting to Gemini API: {exc}")

    message = str(exc)
    lowered = message.lower()
    if "api_key" in lowered or "api key" in lowered:
        return GeneratorConfigError(f"Gemini API key is invalid or not configured: {message}")
    if "quota" in lowered:
        return QuotaExceededError(f"Gemini API quota exceeded: {message}")
    if "network" in lowered or "fetch" in lowered:
        return TransportError(f"Network error while connecting to Gemini API: {message}")
    return ProducerError(f"Failed to generate content with Gemini: {message}")


def build_article_prompt(request: GenerationRequest) -> str:
    structure = []
    if request.include_headings:
        structure.append("Use a clear heading hierarchy (H1 title, H2 sections, H3 where useful).")
    if request.include_bullet_points:
        structure.append("Use bullet points and numbered lists for steps and takeaways.")
    structure_lines = "\n".join(f"- {line}" for line in structure)

    return f"""You are an expert content writer and SEO specialist. Write a complete, engaging blog article.

**Article Details:**
- **Title:** {request.title}
- **Topic/Niche:** {request.topic}
- **Target Word Count:** {request.target_word_count} words
- **Tone:** {request.tone.value}

**Structure:**
- Introduction (150-200 words): hook, problem, what the reader will learn
- Main content (about {int(request.target_word_count * 0.7)} words) in 4-6 sections
- Conclusion (100-150 words) with a clear next step
{structure_lines}

Include actionable tips and practical examples. Write the whole article in markdown and return only the article."""


def build_titles_prompt(topic: str, number_of_days: int) -> str:
    return f"""You are an expert content strategist. Create a content calendar with {number_of_days} unique, engaging, SEO-friendly article titles for the topic: "{topic}".

Mix how-to guides, checklists, common mistakes, tools, case studies and trends.
Keep titles around 50-60 characters and make each one distinct.

Format as a numbered list:
1. [Title]
2. [Title]

Only return the numbered list of titles, nothing else."""


def build_single_title_prompt(topic: str, day_number: int, context: Optional[str] = None) -> str:
    context_line = f"\n**Context:** {context}" if context else ""
    return f"""You are an expert content strategist. Create a single engaging, SEO-friendly article title for day {day_number} of a content series about "{topic}".{context_line}

Return only the title, no quotes, no numbering."""


class GeminiProducer(ContentProducer):
    producer_name = "gemini"
    description = "Article and title generation through the Gemini API."
    requires_network = True

    def __init__(self, api_key: Optional[str], model_name: str = DEFAULT_MODEL):
        self.api_key = api_key
        self.model_name = model_name
        self._model = None

    def _get_model(self):
        if self._model is None:
            if not self.api_key:
                raise GeneratorConfigError("GEMINI_API_KEY is not configured in environment variables")
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def _generate_text(self, prompt: str, label: str) -> str:
        try:
            model = self._get_model()
            logger.debug("Sending %s request to Gemini model=%s", label, self.model_name)
            response = await model.generate_content_async(prompt)
            try:
                text = response.text
            except ValueError as exc:
                # Raised by the SDK when the candidate was blocked or has no parts
                raise EmptyResponseError(f"Gemini returned no text for {label}: {exc}") from exc
        except Exception as exc:
            raise _classify_error(exc) from exc

        if not text or not text.strip():
            raise EmptyResponseError(f"Gemini returned empty content for {label}")
        return text.strip()

    async def produce(self, request: GenerationRequest) -> GeneratedContent:
        logger.info("Starting Gemini content generation for: %r", request.title)
        body = await self._generate_text(build_article_prompt(request), "article")
        content = self.build_content(request, body)
        logger.info("Gemini content generated: %d words", content.word_count)
        return content

    async def generate_article_titles(self, topic: str, number_of_days: int) -> List[str]:
        """Exactly `number_of_days` titles; short answers are padded, long ones truncated."""
        text = await self._generate_text(build_titles_prompt(topic, number_of_days), "titles")
        titles = parse_numbered_titles(text)
        if len(titles) != number_of_days:
            logger.warning("Expected %d titles but got %d for topic %r", number_of_days, len(titles), topic)
        titles = titles[:number_of_days]
        for day in range(len(titles) + 1, number_of_days + 1):
            titles.append(fallback_title(topic, day))
        return titles

    async def generate_single_title(self, topic: str, day_number: int, context: Optional[str] = None) -> str:
        text = await self._generate_text(build_single_title_prompt(topic, day_number, context), "title")
        first_line = text.splitlines()[0]
        match = _NUMBERED_LINE_RE.match(first_line)
        title = (match.group(1) if match else first_line).strip().strip(_QUOTES).strip()
        return title or fallback_title(topic, day_number)

    async def test_connection(self) -> bool:
        try:
            await self.produce(GenerationRequest(title="Test Article", topic="Technology", target_word_count=100))
        except ProducerError as exc:
            logger.error("Gemini API connection test failed: %s", exc)
            return False
        logger.info("Gemini API connection test successful")
        return True
