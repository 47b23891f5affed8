"""Configuration loader for quiz-author.

Settings come from ``quiz_author.toml`` in the workspace config directory,
``QUIZ_AUTHOR_*`` environment variables and CLI flags, with precedence
CLI > env > TOML > built-in defaults.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from quiz_author.bank.filters import CATEGORY_CHOICES
from quiz_author.core import config as core_config
from quiz_author.core import workspace as workspace_mod

CONFIG_FILENAME = "quiz_author.toml"
CONFIG_ENV = "QUIZ_AUTHOR_CONFIG"
ENV_PREFIX = "QUIZ_AUTHOR_"

_CONFIG_TEMPLATE = """
# quiz-author configuration

[storage]
# Directory holding questions.json and quizzes.json.
# Empty means <workspace>/bank; relative paths resolve against the workspace.
dir = ""

[bank]
default_category = "General"
categories = ["General", "Science", "History", "Geography", "Art", "Sports"]
# Show the built-in sample questions until the bank is first saved.
seed_samples = true

[quiz]
default_count = 10
count_choices = [5, 10, 15, 20]

[logging]
level = "INFO"
verbose = false
"""


class ConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class QuizAuthorConfig:
    """Fully resolved settings for one invocation."""

    storage_dir: Path
    default_category: str
    categories: tuple[str, ...]
    seed_samples: bool
    default_count: int
    count_choices: tuple[int, ...]
    log_level: str
    verbose: bool


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of file and env options."""

    storage_dir: Optional[Path] = None
    default_count: Optional[int] = None
    log_level: Optional[str] = None
    verbose: Optional[bool] = None


@dataclass(frozen=True)
class LoadResult:
    config: QuizAuthorConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def config_template() -> str:
    """Return the TOML template written by ``quiz-author init``."""

    return _CONFIG_TEMPLATE.strip() + "\n"


def write_template(path: Path, *, overwrite: bool = False) -> Path:
    try:
        return core_config.write_toml_template(
            path, template=config_template(), overwrite=overwrite
        )
    except core_config.TomlConfigError as exc:
        raise ConfigError(str(exc)) from exc


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Resolve settings for one invocation.

    The workspace is created as a side effect so callers can rely on the
    ``logs`` and ``bank`` directories existing. A missing config file is only
    an error when it was named explicitly (``config_path`` or
    ``QUIZ_AUTHOR_CONFIG``).
    """

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(
            env=env_map, path=workspace_path
        )
    except workspace_mod.WorkspaceError as exc:
        raise ConfigError(str(exc)) from exc

    requested = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.config_dir / CONFIG_FILENAME,
    )
    explicit = config_path is not None or _env_string(env_map, "CONFIG")
    if not requested.exists() and explicit:
        raise ConfigError(f"Config file not found: {requested}")

    table = _default_table()
    try:
        if requested.exists():
            core_config.merge_defaults(
                table, core_config.load_toml(requested)
            )
        config = _build_config(table, overrides, env_map, layout)
    except core_config.TomlConfigError as exc:
        raise ConfigError(str(exc)) from exc

    return LoadResult(
        config=config,
        layout=layout,
        config_path=requested if requested.exists() else None,
    )


def _build_config(
    table: Mapping[str, Mapping[str, Any]],
    overrides: ConfigOverrides,
    env_map: Mapping[str, str],
    layout: workspace_mod.WorkspaceLayout,
) -> QuizAuthorConfig:
    bank, quiz, logging_table = table["bank"], table["quiz"], table["logging"]

    categories = tuple(
        dict.fromkeys(
            core_config.require_string(item, "bank.categories")
            for item in core_config.require_array(
                bank["categories"], "bank.categories"
            )
        )
    )
    default_category = core_config.require_string(
        bank["default_category"], "bank.default_category"
    )
    if default_category not in categories:
        raise core_config.TomlConfigError(
            "bank.default_category must be one of bank.categories."
        )

    count_choices = tuple(
        core_config.require_positive_int(item, "quiz.count_choices")
        for item in core_config.require_array(
            quiz["count_choices"], "quiz.count_choices"
        )
    )
    default_count = core_config.require_positive_int(
        _pick_first(
            overrides.default_count,
            _env_string(env_map, "DEFAULT_COUNT"),
            quiz["default_count"],
        ),
        "quiz.default_count",
    )
    if default_count not in count_choices:
        raise core_config.TomlConfigError(
            "quiz.default_count must be one of quiz.count_choices."
        )

    storage_dir = _resolve_storage_dir(
        _pick_first(
            overrides.storage_dir,
            _env_path(env_map, "STORAGE_DIR"),
            _storage_dir_value(table["storage"]["dir"]),
        ),
        layout=layout,
    )
    log_level = core_config.require_string(
        _pick_first(
            overrides.log_level,
            _env_string(env_map, "LOG_LEVEL"),
            logging_table["level"],
        ),
        "logging.level",
    ).upper()

    return QuizAuthorConfig(
        storage_dir=storage_dir,
        default_category=default_category,
        categories=categories,
        seed_samples=core_config.require_bool(
            bank["seed_samples"], "bank.seed_samples"
        ),
        default_count=default_count,
        count_choices=count_choices,
        log_level=log_level,
        verbose=core_config.require_bool(
            _pick_first(overrides.verbose, logging_table["verbose"]),
            "logging.verbose",
        ),
    )


def _default_table() -> MutableMapping[str, MutableMapping[str, Any]]:
    return copy.deepcopy(
        {
            "storage": {"dir": ""},
            "bank": {
                "default_category": "General",
                "categories": list(CATEGORY_CHOICES),
                "seed_samples": True,
            },
            "quiz": {"default_count": 10, "count_choices": [5, 10, 15, 20]},
            "logging": {"level": "INFO", "verbose": False},
        }
    )


def _resolve_config_path(
    *, config_path: Optional[Path], env_map: Mapping[str, str], default_path: Path
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = _env_string(env_map, "CONFIG")
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _resolve_storage_dir(
    candidate: Optional[Path], *, layout: workspace_mod.WorkspaceLayout
) -> Path:
    if candidate is None:
        return layout.bank_dir
    candidate = candidate.expanduser()
    if not candidate.is_absolute():
        candidate = layout.home / candidate
    return candidate.resolve()


def _storage_dir_value(value: object) -> Optional[Path]:
    if not isinstance(value, str):
        raise core_config.TomlConfigError("storage.dir must be a string.")
    return Path(value.strip()) if value.strip() else None


def _env_path(env_map: Mapping[str, str], key: str) -> Optional[Path]:
    raw = _env_string(env_map, key)
    return Path(raw) if raw else None


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    return raw.strip() or None


def _pick_first(*candidates: object) -> Any:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
