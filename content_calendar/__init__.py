"""
Content Calendar Service

Topics own monthly calendars of scheduled articles; article bodies are
written by Gemini (with an offline template fallback) on a daily schedule
or on demand.
"""
