"""Shared testing helpers for the quiz-author test suite."""

from .questions import make_question  # noqa: F401
from .workspace import WorkspaceBuilder, build_tree  # noqa: F401

__all__ = [
    "WorkspaceBuilder",
    "build_tree",
    "make_question",
]
