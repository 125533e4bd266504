# ui/messages.py

import random
from typing import List, NamedTuple, Optional

class Quote(NamedTuple):
    text: str
    author: str

MOTIVATIONAL_QUOTES: List[Quote] = [
    Quote("Discipline is choosing between what you want now and what you want most.", "Abraham Lincoln"),
    Quote("Success is nothing more than a few simple disciplines, practiced every day.", "Jim Rohn"),
    Quote("Discipline is the bridge between goals and accomplishment.", "Jim Rohn"),
    Quote("We must all suffer one of two things: the pain of discipline or the pain of regret.", "Jim Rohn"),
    Quote("Discipline is doing what needs to be done, even when you don't want to do it.", "Unknown"),
    Quote("The pain of discipline is far less than the pain of regret.", "Sarah Bombell"),
    Quote("Motivation gets you going, but discipline keeps you growing.", "John C. Maxwell"),
]

PAGE_TITLE = "Discipline Dashboard"
PAGE_TAGLINE = "Build habits. Track progress. Stay disciplined."
EMPTY_STATE_MESSAGE = "No habits yet. Start building your discipline by adding your first habit!"
ADD_HABIT_PLACEHOLDER = "Add a new habit (e.g., Exercise, Read, Meditate)"

def pick_quote(rng: Optional[random.Random] = None) -> Quote:
    """Случайная цитата (равномерно из фиксированного списка)"""
    return (rng or random).choice(MOTIVATIONAL_QUOTES)

def streak_badge(streak: int) -> Optional[str]:
    if streak <= 0:
        return None
    return f"{streak} day streak 🔥"
