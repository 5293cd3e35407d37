# services/quotes.py

import random
from typing import Optional

MOTIVATIONAL_QUOTES = [
    "Small steps every day lead to big changes every year.",
    "You don't have to be great to get started, but you have to get started to be great.",
    "Success is the sum of small efforts repeated day in and day out.",
    "The secret of getting ahead is getting started.",
    "Don't watch the clock; do what it does. Keep going.",
    "Progress, not perfection.",
    "Every expert was once a beginner.",
    "The best time to plant a tree was 20 years ago. The second best time is now.",
    "Consistency is the mother of mastery.",
    "Your future self will thank you for the habits you build today.",
]

FALLBACK_QUOTE = "Keep going!"


def get_random_quote(rng: Optional[random.Random] = None) -> str:
    if not MOTIVATIONAL_QUOTES:
        return FALLBACK_QUOTE
    return (rng or random).choice(MOTIVATIONAL_QUOTES)
