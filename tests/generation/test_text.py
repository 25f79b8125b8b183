"""Tests for word counts, read time and keyword extraction."""

from content_calendar.generation.text import count_words, estimate_read_time, extract_keywords


class TestCountWords:
    def test_whitespace_tokens(self):
        assert count_words("one two\nthree\tfour   five") == 5

    def test_empty(self):
        assert count_words("   ") == 0


class TestReadTime:
    def test_four_hundred_words_is_two_minutes(self):
        body = " ".join(["word"] * 400)
        assert estimate_read_time(count_words(body)) == 2

    def test_rounds_up(self):
        assert estimate_read_time(201) == 2
        assert estimate_read_time(1) == 1

    def test_zero_words(self):
        assert estimate_read_time(0) == 0


class TestExtractKeywords:
    def test_title_and_topic_tokens(self):
        assert extract_keywords("The Complete Guide", "Digital Marketing") == [
            "complete", "guide", "digital", "marketing",
        ]

    def test_deduplicates_in_first_seen_order(self):
        assert extract_keywords("Marketing Growth Marketing", "Growth Tips") == ["marketing", "growth", "tips"]

    def test_capped_at_five(self):
        keywords = extract_keywords("Alpha Bravo Charlie Delta", "Echoes Foxtrot Golfing")
        assert keywords == ["alpha", "bravo", "charlie", "delta", "echoes"]

    def test_short_tokens_dropped(self):
        assert extract_keywords("How to SEO", "Web") == []
