"""Settings for the todo CLI.

Priority for every setting: command-line option > real environment variable
> project .env file > built-in default. The .env file sits at the project
root (one level above src/) and only recognised keys are read from it.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from todo_models import DEFAULT_PROJECT

PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_FILE = PROJECT_ROOT / '.env'
DEFAULT_TODO_FILE = PROJECT_ROOT / 'data' / 'list.csv'
DEFAULT_LOG_LEVEL = 'WARNING'

KNOWN_KEYS = frozenset({
    'TODO_FILE', 'TODO_DEFAULT_PROJECT', 'TODO_LOG_LEVEL',
    'TODO_PRIMARY', 'TODO_DONE', 'TODO_PENDING',
})


def read_env_file(path: Path = ENV_FILE) -> Dict[str, str]:
    """Parse KEY=VALUE lines; blanks, comments and unknown keys are ignored."""
    overrides: Dict[str, str] = {}
    if not path.exists():
        return overrides
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        if k in KNOWN_KEYS:
            overrides[k] = v.strip().strip('"').strip("'")
    return overrides


def lookup(key: str, default: str, environ: Optional[Mapping[str, str]] = None,
           env_file: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    env_file = read_env_file() if env_file is None else env_file
    return str(environ.get(key) or env_file.get(key) or default)


@dataclass
class Settings:
    todo_file: Path
    default_project: str = DEFAULT_PROJECT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None,
             env_file: Optional[Mapping[str, str]] = None) -> 'Settings':
        overrides = read_env_file() if env_file is None else env_file
        return cls(
            todo_file=Path(lookup('TODO_FILE', str(DEFAULT_TODO_FILE), environ, overrides)).expanduser(),
            default_project=lookup('TODO_DEFAULT_PROJECT', DEFAULT_PROJECT, environ, overrides),
            log_level=lookup('TODO_LOG_LEVEL', DEFAULT_LOG_LEVEL, environ, overrides).upper(),
        )
