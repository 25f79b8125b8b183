"""Template Producer - deterministic, offline article used when AI generation fails."""

from typing import List, Tuple

from content_calendar.generation.models import GenerationRequest, GeneratedContent
from content_calendar.generation.producers.base import ContentProducer

FALLBACK_NOTE = (
    "*Note: This content was generated using fallback mode. "
    "Configure GEMINI_API_KEY for AI-powered generation.*"
)

# Words reserved for the introduction and conclusion
FRAME_WORDS = 100
SECTION_BASE_WORDS = 50

SECTIONS: List[Tuple[str, str]] = [
    ("Understanding the Basics",
     "Before diving into advanced techniques, it's important to understand the fundamental "
     "principles of {topic}. These foundations will serve as the building blocks for "
     "everything else we'll discuss in this article."),
    ("Key Benefits and Advantages",
     "There are numerous benefits to mastering {topic}. From improved efficiency to better "
     "results, the advantages are clear and measurable. Let's explore the most significant "
     "benefits you can expect."),
    ("Common Mistakes to Avoid",
     "Even experienced practitioners make mistakes when it comes to {topic}. By understanding "
     "these common pitfalls, you can avoid them and accelerate your progress significantly."),
    ("Step-by-Step Implementation",
     "Now that we've covered the theory, let's get practical. Here's a detailed step-by-step "
     "process you can follow to implement these concepts in your own situation."),
    ("Advanced Tips and Strategies",
     "Once you've mastered the basics, these advanced strategies will help you take your "
     "{topic} skills to the next level. These techniques are used by professionals and "
     "experts in the field."),
    ("Measuring Success and Results",
     "To ensure you're making progress, it's important to track and measure your results. "
     "Here are the key metrics and indicators you should monitor to gauge your success "
     "with {topic}."),
]

FILLER_SENTENCES = [
    "This approach to {topic} has been proven effective across various industries and use cases.",
    "Many professionals have found success by implementing these specific techniques and methodologies.",
    "The key is to remain consistent and patient as you develop your {topic} skills over time.",
    "Research shows that regular practice and application of these principles leads to significant improvements.",
    "It's important to adapt these strategies to your specific situation and requirements.",
    "Consider seeking feedback from experienced practitioners to accelerate your learning process.",
    "Documentation and tracking of your progress will help you identify areas for improvement.",
    "Don't hesitate to experiment with different approaches to find what works best for you.",
    "Building a strong foundation in {topic} will pay dividends in the long run.",
    "Stay updated with the latest trends and developments in the field of {topic}.",
]

IMPLEMENTATION_STEPS = [
    "Define a clear, measurable goal for your {topic} work",
    "Audit where you are today and note the biggest gaps",
    "Pick one technique from this guide and apply it this week",
    "Review the results and adjust before adding the next step",
]


def filler_text(topic: str, target_words: int) -> str:
    """Cycle through filler sentences until at least `target_words` words are written."""
    sentences = []
    words = 0
    index = 0
    while words < target_words:
        sentence = FILLER_SENTENCES[index % len(FILLER_SENTENCES)].format(topic=topic)
        sentences.append(sentence)
        words += len(sentence.split())
        index += 1
    return " ".join(sentences)


class TemplateProducer(ContentProducer):
    producer_name = "template"
    description = "Deterministic template article; never needs the network."
    requires_network = False

    async def produce(self, request: GenerationRequest) -> GeneratedContent:
        body = self.render(request)
        return self.build_content(request, f"{body}\n\n{FALLBACK_NOTE}", measured=body)

    def render(self, request: GenerationRequest) -> str:
        topic = request.topic
        title = request.title
        words_per_section = (request.target_word_count - FRAME_WORDS) // len(SECTIONS)

        parts = []
        if request.include_headings:
            parts.append(f"# {title}")
        parts.append(
            f"{title} is an essential aspect of {topic} that many people overlook. In this "
            f"comprehensive guide, we'll explore the key concepts, best practices, and "
            f"actionable strategies you can implement immediately."
        )

        for heading, lead in SECTIONS:
            if request.include_headings:
                parts.append(f"## {heading}")
            paragraph = lead.format(topic=topic)
            extra = filler_text(topic, words_per_section - SECTION_BASE_WORDS)
            if extra:
                paragraph = f"{paragraph} {extra}"
            parts.append(paragraph)
            if request.include_bullet_points and heading == "Step-by-Step Implementation":
                parts.append("\n".join(f"- {step.format(topic=topic)}" for step in IMPLEMENTATION_STEPS))

        if request.include_headings:
            parts.append("## Conclusion")
        parts.append(
            f"Mastering {topic} is a journey that requires dedication, practice, and the right "
            f"strategies. By following the principles and techniques outlined in this guide, "
            f"you'll be well on your way to achieving your goals. Remember to stay consistent, "
            f"measure your progress, and don't be afraid to adjust your approach as you learn "
            f"and grow."
        )
        parts.append(
            f"Start implementing these strategies today, and you'll begin to see improvements in "
            f"your {topic} efforts. The key is to take action and remain committed to continuous "
            f"improvement."
        )
        return "\n\n".join(parts)
