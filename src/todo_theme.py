"""Colour & style helpers for the printed table.

Decisions:
- Truecolor preferred; falls back to the 256-color cube if unsupported.
- Disabled automatically when stdout is not a TTY unless FORCE_COLOR=1.
- NO_COLOR disables colour completely.
- Palette overridable through TODO_PRIMARY / TODO_DONE / TODO_PENDING,
  from the environment or the project .env file.
Colour is applied to whole, already padded lines so layout is unaffected.
"""
from __future__ import annotations
import os, sys

from todo_config import lookup, read_env_file

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''

def _valid_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB on the xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    return f"\033[38;5;{16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)

def _palette_entry(key: str, default: str, overrides: dict[str, str]) -> str:
    value = lookup(key, default, env_file=overrides)
    return value if _valid_hex(value) else default

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_DONE_DEFAULT = '#A7E399'
HEX_PENDING_DEFAULT = '#48B3AF'

_overrides = read_env_file()
HEX_PRIMARY = _palette_entry('TODO_PRIMARY', HEX_PRIMARY_DEFAULT, _overrides)
HEX_DONE = _palette_entry('TODO_DONE', HEX_DONE_DEFAULT, _overrides)
HEX_PENDING = _palette_entry('TODO_PENDING', HEX_PENDING_DEFAULT, _overrides)

HEADER_COLOR = _from_hex(HEX_PRIMARY) + BOLD
RULE_COLOR = _from_hex(HEX_PRIMARY)
DONE_COLOR = _from_hex(HEX_DONE) + DIM
PENDING_COLOR = _from_hex(HEX_PENDING)

def color(text: str, *styles: str) -> str:
    """Wrap text in ANSI styles (no-op when colour is disabled)."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color', 'RESET', 'BOLD', 'DIM', 'HEADER_COLOR', 'RULE_COLOR', 'DONE_COLOR', 'PENDING_COLOR',
    'HEX_PRIMARY', 'HEX_DONE', 'HEX_PENDING',
]
