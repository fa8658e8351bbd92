"""
Character question prompt generator.

Draws random role-play questions from a categorized question bank.
"""
from .bank import (
    CATEGORIES,
    DrawnQuestion,
    QuestionBank,
    QuestionDraw,
    clamp_question_count,
    fetch_question_bank,
)

__all__ = [
    "CATEGORIES",
    "DrawnQuestion",
    "QuestionBank",
    "QuestionDraw",
    "clamp_question_count",
    "fetch_question_bank",
]
