"""
Article Generation Module

Architecture:
- producers/       One class per content strategy (Gemini, offline template)
- generator.py     Ordered producer chain with fallback
- orchestrator.py  Article status state machine, batch runs, manual trigger, stats
- scheduler.py     Daily generation and weekly maintenance jobs
- calendar_builder.py One SCHEDULED article per day of a month
- state.py         MongoDB persistence for topics, calendars and articles
"""
