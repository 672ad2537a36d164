"""
Solution Checker.

Compares submitted code against an exercise's canonical solution after
normalizing both sides: escaped newlines/tabs/quotes are decoded, every line
is trimmed, blank lines are dropped. Indentation and blank lines never matter;
statement order and identifiers do.
"""
from typing import Optional, Protocol

# Order matters: backslash last so "\\n" is not decoded twice
_ESCAPES = (
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ('\\"', '"'),
    ("\\\\", "\\"),
)


def unescape(text: str) -> str:
    for escaped, literal in _ESCAPES:
        text = text.replace(escaped, literal)
    return text


def normalize_code(text: str) -> str:
    lines = (line.strip() for line in unescape(text).split("\n"))
    return "\n".join(line for line in lines if line)


def solutions_match(submitted: str, solution: str) -> bool:
    return normalize_code(submitted) == normalize_code(solution)


class SupportsSolutionLookup(Protocol):
    async def aget_by_id(self, exercise_id: str) -> Optional[object]:
        ...


class SolutionChecker:
    """Looks up the exercise for a room and judges submitted code."""

    def __init__(self, store: SupportsSolutionLookup):
        self.store = store

    async def is_correct(self, room_id: str, submitted_code: str) -> bool:
        """
        Return True if the code matches the room's exercise solution.

        An unknown exercise is simply "not correct". Store failures
        (ExerciseStoreError) propagate to the caller.
        """
        exercise = await self.store.aget_by_id(room_id)
        if exercise is None:
            return False
        return solutions_match(submitted_code, exercise.solution)
