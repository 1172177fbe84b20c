from __future__ import annotations

from typing import Any, Optional

from base_classes import UIAbort
from ui.base import UI, ChoiceOpts, TextOpts


class NonInteractiveUI(UI):
    """Wraps another UI and answers prompts from their defaults.

    - Output calls are forwarded to the parent untouched.
    - ask_* never block: the default is validated (when a validator is set)
      and returned. A validator that raises fails the prompt with that
      exception; one that returns False yields the zero value ('' or 0).
    - Confirmations are treated as approved; passwords cannot be supplied
      and abort with UIAbort.
    """

    def __init__(self, parent: UI, logger: Optional[Any] = None) -> None:
        self.parent = parent
        self._logger = logger

    # Output -------------------------------------------------------------
    def error_linef(self, pattern: str, *args: Any) -> None:
        self.parent.error_linef(pattern, *args)

    def print_linef(self, pattern: str, *args: Any) -> None:
        self.parent.print_linef(pattern, *args)

    def begin_linef(self, pattern: str, *args: Any) -> None:
        self.parent.begin_linef(pattern, *args)

    def end_linef(self, pattern: str, *args: Any) -> None:
        self.parent.end_linef(pattern, *args)

    def print_block(self, block: bytes) -> None:
        self.parent.print_block(block)

    def print_error_block(self, block: str) -> None:
        self.parent.print_error_block(block)

    def print_table(self, table) -> None:
        self.parent.print_table(table)

    # Input requests -----------------------------------------------------
    def ask_for_text(self, opts: TextOpts) -> str:
        if opts.validate_func is not None and not opts.validate_func(opts.default):
            self._record('text', opts.label, '', valid=False)
            return ''
        self._record('text', opts.label, opts.default)
        return opts.default

    def ask_for_choice(self, opts: ChoiceOpts) -> int:
        if opts.validate_func is not None and not opts.validate_func(opts.default):
            self._record('choice', opts.label, 0, valid=False)
            return 0
        self._record('choice', opts.label, opts.default)
        return opts.default

    def ask_for_password(self, label: str) -> str:
        raise UIAbort("Cannot ask for password in non-interactive UI")

    def ask_for_confirmation(self) -> None:
        # Always respond successfully
        self._record('confirmation', None, True)

    # Mode / lifecycle ---------------------------------------------------
    def is_interactive(self) -> bool:
        return False

    def flush(self) -> None:
        self.parent.flush()

    def _record(self, kind: str, label: Optional[str], answer: Any, valid: bool = True) -> None:
        if self._logger is None:
            return
        self._logger.ui_detail('prompt_auto_resolved', {
            'kind': kind,
            'label': label,
            'answer': answer,
            'valid': valid,
        })
