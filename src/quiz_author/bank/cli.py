"""CLI entry points for the question bank, quizzes and the TUI browser."""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from quiz_author.config import (
    ConfigError,
    ConfigOverrides,
    QuizAuthorConfig,
    load_config,
)
from quiz_author.core.logging import configure_logger
from quiz_author.views.editor_session import run_editor_session
from quiz_author.views.render import (
    render_notification,
    render_questions,
    render_quiz_detail,
    render_quizzes,
)

from .assembler import QuizDraft
from .editor import QuestionEditor
from .errors import (
    EmptyPoolError,
    Notification,
    ValidationError,
    notification_for,
)
from .filters import ALL_CATEGORIES, categories, filter_questions
from .models import OPTION_IDS
from .repository import QuestionStore, QuizStore
from .samples import SAMPLE_QUESTIONS
from .storage import FileStorage

_LETTERS = tuple(chr(ord("A") + i) for i in range(len(OPTION_IDS)))


@dataclass
class BankContext:
    """Everything a command needs: settings, stores, logger and console."""

    config: QuizAuthorConfig
    questions: QuestionStore
    quizzes: QuizStore
    logger: logging.Logger
    log_path: Path
    console: Console


def _make_console() -> Console:
    return Console()


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to quiz_author.toml (defaults to the workspace config).",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root (defaults to QUIZ_AUTHOR_DATA_HOME).",
    )
    parser.add_argument(
        "--storage-dir",
        type=Path,
        help="Directory holding questions.json and quizzes.json.",
    )
    parser.add_argument("--log-level", help="Log level for the log file.")
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=None,
        help="Mirror log records to stderr.",
    )


def open_context(args: argparse.Namespace) -> BankContext:
    """Load configuration and open both stores for ``args``."""

    overrides = ConfigOverrides(
        storage_dir=getattr(args, "storage_dir", None),
        log_level=getattr(args, "log_level", None),
        verbose=getattr(args, "verbose", None),
    )
    result = load_config(
        config_path=getattr(args, "config", None),
        overrides=overrides,
        workspace_path=getattr(args, "workspace", None),
    )
    config = result.config
    logger, log_path = configure_logger(
        "quiz_author",
        log_dir=result.layout.log_dir,
        level=config.log_level,
        verbose=config.verbose,
    )
    storage = FileStorage(config.storage_dir)
    defaults = SAMPLE_QUESTIONS if config.seed_samples else ()
    context = BankContext(
        config=config,
        questions=QuestionStore(storage, defaults=defaults),
        quizzes=QuizStore(storage),
        logger=logger,
        log_path=log_path,
        console=_make_console(),
    )
    logger.debug(
        "Opened question bank",
        extra={"event": "bank_opened", "storage_dir": config.storage_dir},
    )
    return context


# questions ---------------------------------------------------------------


def _build_questions_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-author questions",
        description="Manage the question bank.",
    )
    _add_common_arguments(parser)
    sub = parser.add_subparsers(dest="action", required=True)

    sp_list = sub.add_parser("list", help="List questions")
    sp_list.add_argument(
        "--category",
        default=ALL_CATEGORIES,
        help="Only show questions in this category.",
    )

    sub.add_parser("categories", help="List categories in use")

    sp_add = sub.add_parser(
        "add",
        help="Add a question (interactive when --text is omitted)",
    )
    sp_add.add_argument("--text", help="Question text.")
    sp_add.add_argument("--category", help="Question category.")
    sp_add.add_argument(
        "--option",
        dest="options",
        action="append",
        default=[],
        metavar="TEXT",
        help="Option text; repeat four times in A-D order.",
    )
    sp_add.add_argument(
        "--correct",
        type=str.upper,
        choices=_LETTERS,
        help="Letter of the correct option.",
    )

    sp_remove = sub.add_parser("remove", help="Delete a question")
    sp_remove.add_argument("question_id")
    return parser


def _cmd_questions_list(ctx: BankContext, args: argparse.Namespace) -> int:
    questions = ctx.questions.items
    shown = filter_questions(questions, args.category)
    render_questions(ctx.console, shown, category=args.category)
    return 0 if shown else 1


def _cmd_questions_categories(
    ctx: BankContext, args: argparse.Namespace
) -> int:
    for name in categories(ctx.questions.items):
        ctx.console.print(name)
    return 0


def _cmd_questions_add(ctx: BankContext, args: argparse.Namespace) -> int:
    editor = QuestionEditor(
        ctx.questions, default_category=ctx.config.default_category
    )
    if args.text is None:
        result = run_editor_session(
            editor,
            ctx.console,
            lambda: ctx.console.input("[bold cyan]editor>[/] "),
            categories=ctx.config.categories,
        )
        return 0 if result.committed else 1

    if len(args.options) > len(OPTION_IDS):
        ctx.console.print(
            f"[red]At most {len(OPTION_IDS)} options are supported.[/]"
        )
        return 2
    editor.set_text(args.text)
    if args.category:
        if args.category not in ctx.config.categories:
            choices = ", ".join(ctx.config.categories)
            ctx.console.print(
                f"[red]Unknown category '{args.category}'.[/] "
                f"Choose one of: {choices}"
            )
            return 2
        editor.set_category(args.category)
    for option_id, text in zip(OPTION_IDS, args.options):
        editor.set_option_text(option_id, text)
    if args.correct:
        editor.set_correct(editor.option_for_letter(args.correct).id)
    try:
        question = editor.commit()
    except ValidationError as exc:
        render_notification(ctx.console, notification_for(exc))
        return 1
    render_notification(
        ctx.console,
        Notification(
            "Question added",
            f"Question {question.id} has been added to the question bank.",
        ),
    )
    return 0


def _cmd_questions_remove(ctx: BankContext, args: argparse.Namespace) -> int:
    if not ctx.questions.remove(args.question_id):
        ctx.console.print(f"[red]No question with id '{args.question_id}'.[/]")
        return 1
    render_notification(
        ctx.console,
        Notification(
            "Question deleted",
            "The question has been removed from the question bank.",
        ),
    )
    return 0


def questions_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_questions_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        ctx = open_context(args)
    except ConfigError as exc:
        parser.error(str(exc))
    handlers = {
        "list": _cmd_questions_list,
        "categories": _cmd_questions_categories,
        "add": _cmd_questions_add,
        "remove": _cmd_questions_remove,
    }
    return handlers[args.action](ctx, args)


# quizzes -----------------------------------------------------------------


def _build_quizzes_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-author quizzes",
        description="Assemble and inspect quizzes.",
    )
    _add_common_arguments(parser)
    sub = parser.add_subparsers(dest="action", required=True)

    sub.add_parser("list", help="List saved quizzes")

    sp_create = sub.add_parser(
        "create", help="Assemble a quiz from random bank questions"
    )
    sp_create.add_argument("--title", required=True, help="Quiz title.")
    sp_create.add_argument(
        "--count",
        type=int,
        help="Number of questions (defaults to quiz.default_count).",
    )
    sp_create.add_argument("--description", help="Override the description.")
    sp_create.add_argument(
        "--include",
        nargs="*",
        default=[],
        metavar="ID",
        help="Question ids to add to the random selection.",
    )
    sp_create.add_argument(
        "--exclude",
        nargs="*",
        default=[],
        metavar="ID",
        help="Question ids to drop from the random selection.",
    )
    sp_create.add_argument(
        "--seed", type=int, help="Seed the shuffle for repeatable picks."
    )
    sp_create.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the selection without saving the quiz.",
    )

    sp_show = sub.add_parser("show", help="Show one quiz with its questions")
    sp_show.add_argument("quiz_id")
    return parser


def _cmd_quizzes_list(ctx: BankContext, args: argparse.Namespace) -> int:
    render_quizzes(ctx.console, ctx.quizzes.items)
    return 0


def _cmd_quizzes_create(ctx: BankContext, args: argparse.Namespace) -> int:
    count = args.count if args.count is not None else ctx.config.default_count
    if count not in ctx.config.count_choices:
        choices = ", ".join(str(c) for c in ctx.config.count_choices)
        ctx.console.print(
            f"[red]--count must be one of: {choices}.[/]"
        )
        return 2
    pool = ctx.questions.items
    known = {question.id for question in pool}
    draft = QuizDraft(
        title=args.title, requested=count, description=args.description
    )
    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        draft.sample(pool, rng=rng)
    except EmptyPoolError as exc:
        render_notification(ctx.console, notification_for(exc))
        return 1

    for question_id in args.exclude:
        if draft.is_selected(question_id):
            draft.toggle(question_id)
    for question_id in args.include:
        if question_id not in known:
            ctx.console.print(f"[yellow]Skipping unknown id {question_id}.[/]")
            continue
        if not draft.is_selected(question_id):
            draft.toggle(question_id)

    ctx.console.print(
        f"Selected: {len(draft.selected)}/{count} questions"
    )
    if draft.selected:
        render_questions(
            ctx.console,
            [q for q in pool if draft.is_selected(q.id)],
            selected_ids=draft.selected,
        )
    try:
        quiz = draft.submit()
    except ValidationError as exc:
        render_notification(ctx.console, notification_for(exc))
        return 1
    if args.dry_run:
        ctx.console.print("[dim]Dry run: quiz not saved.[/]")
        return 0
    ctx.quizzes.add(quiz)
    render_notification(
        ctx.console,
        Notification(
            "Quiz created!",
            f'Your quiz "{quiz.title}" has been created with '
            f"{len(quiz.questions)} questions.",
        ),
    )
    return 0


def _cmd_quizzes_show(ctx: BankContext, args: argparse.Namespace) -> int:
    quiz = ctx.quizzes.get(args.quiz_id)
    if quiz is None:
        ctx.console.print(f"[red]No quiz with id '{args.quiz_id}'.[/]")
        return 1
    resolved = QuizStore.resolve_questions(quiz, ctx.questions.items)
    render_quiz_detail(ctx.console, quiz, resolved)
    return 0


def quizzes_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_quizzes_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        ctx = open_context(args)
    except ConfigError as exc:
        parser.error(str(exc))
    handlers = {
        "list": _cmd_quizzes_list,
        "create": _cmd_quizzes_create,
        "show": _cmd_quizzes_show,
    }
    return handlers[args.action](ctx, args)


# browse ------------------------------------------------------------------


def browse_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="quiz-author browse",
        description="Browse and prune the question bank in a terminal UI.",
    )
    _add_common_arguments(parser)
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        ctx = open_context(args)
    except ConfigError as exc:
        parser.error(str(exc))

    from quiz_author.views.app import QuestionBankApp

    QuestionBankApp(ctx.questions, ctx.quizzes).run()
    return 0
