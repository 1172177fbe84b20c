from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ui.base import UI, ChoiceOpts, TextOpts


class RecordingUI(UI):
    """A UI that prints nothing and records every call for inspection.

    - calls holds (method_name, args) tuples in call order.
    - ask_* answer from the canned values given at construction, falling
      back to the prompt's own default.
    """

    def __init__(
            self,
            *,
            text: Optional[str] = None,
            choice: Optional[int] = None,
            password: str = '',
            interactive: bool = True,
    ) -> None:
        self.calls: List[Tuple[str, tuple]] = []
        self.flushed = 0
        self._text = text
        self._choice = choice
        self._password = password
        self._interactive = interactive

    # Output -------------------------------------------------------------
    def error_linef(self, pattern: str, *args: Any) -> None:
        self.calls.append(('error_linef', (pattern, *args)))

    def print_linef(self, pattern: str, *args: Any) -> None:
        self.calls.append(('print_linef', (pattern, *args)))

    def begin_linef(self, pattern: str, *args: Any) -> None:
        self.calls.append(('begin_linef', (pattern, *args)))

    def end_linef(self, pattern: str, *args: Any) -> None:
        self.calls.append(('end_linef', (pattern, *args)))

    def print_block(self, block: bytes) -> None:
        self.calls.append(('print_block', (block,)))

    def print_error_block(self, block: str) -> None:
        self.calls.append(('print_error_block', (block,)))

    def print_table(self, table) -> None:
        self.calls.append(('print_table', (table,)))

    # Inputs -------------------------------------------------------------
    def ask_for_text(self, opts: TextOpts) -> str:
        self.calls.append(('ask_for_text', (opts,)))
        return opts.default if self._text is None else self._text

    def ask_for_choice(self, opts: ChoiceOpts) -> int:
        self.calls.append(('ask_for_choice', (opts,)))
        return opts.default if self._choice is None else self._choice

    def ask_for_password(self, label: str) -> str:
        self.calls.append(('ask_for_password', (label,)))
        return self._password

    def ask_for_confirmation(self) -> None:
        self.calls.append(('ask_for_confirmation', ()))

    def is_interactive(self) -> bool:
        return self._interactive

    def flush(self) -> None:
        self.flushed += 1

    # Inspection ---------------------------------------------------------
    def methods(self) -> List[str]:
        return [name for name, _ in self.calls]
