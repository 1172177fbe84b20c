from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional


@dataclass
class TextOpts:
    label: str
    default: str = ''
    validate_func: Optional[Callable[[str], bool]] = None


@dataclass
class ChoiceOpts:
    label: str
    default: int = 0
    choices: List[str] = field(default_factory=list)
    validate_func: Optional[Callable[[int], bool]] = None


class UI:
    """Abstract console UI.

    Output methods are best-effort: implementations log write failures and
    never raise them. Prompt methods either return the answer or raise
    UIError (see base_classes).

    Line methods take printf-style patterns (``"x=%d"``) with positional args.
    """

    # Output -------------------------------------------------------------
    def error_linef(self, pattern: str, *args: Any) -> None:
        raise NotImplementedError

    def print_linef(self, pattern: str, *args: Any) -> None:
        raise NotImplementedError

    def begin_linef(self, pattern: str, *args: Any) -> None:
        raise NotImplementedError

    def end_linef(self, pattern: str, *args: Any) -> None:
        raise NotImplementedError

    def print_block(self, block: bytes) -> None:
        raise NotImplementedError

    def print_error_block(self, block: str) -> None:
        raise NotImplementedError

    def print_table(self, table) -> None:
        raise NotImplementedError

    # Input requests -----------------------------------------------------
    def ask_for_text(self, opts: TextOpts) -> str:
        raise NotImplementedError

    def ask_for_choice(self, opts: ChoiceOpts) -> int:
        raise NotImplementedError

    def ask_for_password(self, label: str) -> str:
        raise NotImplementedError

    def ask_for_confirmation(self) -> None:
        raise NotImplementedError

    # Mode / lifecycle ---------------------------------------------------
    def is_interactive(self) -> bool:
        raise NotImplementedError

    def flush(self) -> None:
        raise NotImplementedError


def format_message(pattern: str, args: tuple) -> str:
    """Apply printf-style args; a pattern without args is used verbatim.

    Raises TypeError or ValueError when the verbs and args do not match.
    """
    if not args:
        return pattern
    return pattern % args
