"""Word counts, read time and keyword extraction for generated articles."""

import math
from typing import List

WORDS_PER_MINUTE = 200
MAX_KEYWORDS = 5
MIN_KEYWORD_LENGTH = 4


def count_words(text: str) -> int:
    return len(text.split())


def estimate_read_time(word_count: int) -> int:
    """Minutes needed to read `word_count` words, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


def extract_keywords(title: str, topic: str) -> List[str]:
    """
    Lowercased title and topic tokens longer than three characters,
    first occurrence order, without duplicates, capped at MAX_KEYWORDS.
    """
    keywords: List[str] = []
    for token in f"{title} {topic}".lower().split():
        if len(token) < MIN_KEYWORD_LENGTH or token in keywords:
            continue
        keywords.append(token)
        if len(keywords) == MAX_KEYWORDS:
            break
    return keywords
