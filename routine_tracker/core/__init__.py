"""Core: чистые доменные правила (day keys, streaks, calendar)."""
