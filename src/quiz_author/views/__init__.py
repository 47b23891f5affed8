"""Terminal views: Rich renderers and the editor prompt loop.

The Textual browser lives in :mod:`quiz_author.views.app` and is imported on
demand so plain CLI commands do not load Textual.
"""

from .editor_session import (
    EditorCommand,
    EditorSessionResult,
    parse_editor_command,
    run_editor_session,
)
from .render import (
    question_panel,
    render_notification,
    render_questions,
    render_quiz_detail,
    render_quizzes,
)

__all__ = [
    "EditorCommand",
    "EditorSessionResult",
    "parse_editor_command",
    "run_editor_session",
    "question_panel",
    "render_notification",
    "render_questions",
    "render_quiz_detail",
    "render_quizzes",
]
