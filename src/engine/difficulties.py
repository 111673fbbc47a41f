from typing import List

from .models import Difficulty, char_range


DIGITS = char_range("0", "9")
LOWERCASE = char_range("a", "z")

# Built-in difficulty levels, in menu order
DIFFICULTIES: List[Difficulty] = [
    Difficulty(
        name="easy",
        correct_guess_points=5,
        # You better take easy seriously!
        invalid_key_press_penalty=4,
        rows=3,
        columns=2,
        start_delay=0.75,
        hide_interval=1.25,
        pools=[char_range("1", "6")],
    ),
    Difficulty(
        name="normal",
        correct_guess_points=5,
        invalid_key_press_penalty=2,
        rows=3,
        columns=3,
        start_delay=1.5,
        hide_interval=1.25,
        pools=[DIGITS],
    ),
    Difficulty(
        name="hard",
        correct_guess_points=5,
        invalid_key_press_penalty=5,
        rows=3,
        columns=3,
        start_delay=1.5,
        hide_interval=1.5,
        pools=[LOWERCASE],
    ),
    Difficulty(
        name="extreme",
        correct_guess_points=4,
        invalid_key_press_penalty=5,
        rows=4,
        columns=3,
        start_delay=1.5,
        hide_interval=1.5,
        pools=[DIGITS, LOWERCASE],
    ),
    Difficulty(
        name="nightmare",
        correct_guess_points=4,
        invalid_key_press_penalty=10,
        rows=5,
        columns=5,
        start_delay=2.5,
        hide_interval=1.5,
        pools=[DIGITS, LOWERCASE],
    ),
]

DEFAULT_DIFFICULTY = "normal"
