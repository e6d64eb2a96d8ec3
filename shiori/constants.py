"""Blog-wide constants."""

CATEGORIES = [
    "Journal",
    "Life",
    "Review",
    "Travel",
    "Food",
    "Thought",
    "Tech",
    "Work",
]
