from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from base_classes import UIError
from ui.base import UI, ChoiceOpts, TextOpts, format_message

# Raised by rich.prompt when input ends or is interrupted
PROMPT_ERRORS = (EOFError, KeyboardInterrupt, OSError)

# Raised by text streams on failed writes (ValueError for closed files)
WRITE_ERRORS = (OSError, ValueError, UnicodeError)


class WriterUI(UI):
    """UI over a pair of text streams, prompting through rich.prompt.

    Output failures go to ``logger.error`` tagged "ui" and are never raised.
    Prompt failures raise UIError chained to the underlying exception.
    """

    def __init__(
            self,
            out_writer: TextIO,
            err_writer: TextIO,
            logger: Any,
            *,
            in_stream: Optional[TextIO] = None,
            confirm_label: str = 'Continue?',
    ) -> None:
        self._out = out_writer
        self._err = err_writer
        self._in = in_stream
        self._logger = logger
        self._log_tag = 'ui'
        self._confirm_label = confirm_label
        self._console = Console(file=out_writer, highlight=False)

    def is_tty(self) -> bool:
        isatty = getattr(self._out, 'isatty', None)
        if not callable(isatty):
            return False
        try:
            return bool(isatty())
        except WRITE_ERRORS:
            return False

    # Output -------------------------------------------------------------
    def error_linef(self, pattern: str, *args: Any) -> None:
        """Write a whole line to the error stream."""
        message = self._format(pattern, args, 'UI.ErrorLinef')
        self._write(self._err, message + '\n', 'UI.ErrorLinef', message)

    def print_linef(self, pattern: str, *args: Any) -> None:
        """Write a whole line to the output stream."""
        message = self._format(pattern, args, 'UI.PrintLinef')
        self._write(self._out, message + '\n', 'UI.PrintLinef', message)

    def begin_linef(self, pattern: str, *args: Any) -> None:
        """Start a line on the output stream without terminating it."""
        message = self._format(pattern, args, 'UI.BeginLinef')
        self._write(self._out, message, 'UI.BeginLinef', message)

    def end_linef(self, pattern: str, *args: Any) -> None:
        """Finish a line started with begin_linef."""
        message = self._format(pattern, args, 'UI.EndLinef')
        self._write(self._out, message + '\n', 'UI.EndLinef', message)

    def print_block(self, block: bytes) -> None:
        try:
            if isinstance(block, str):
                self._out.write(block)
                return
            buffer = getattr(self._out, 'buffer', None)
            if buffer is not None:
                # Keep ordering with text already queued on the wrapper
                self._out.flush()
                buffer.write(block)
            else:
                self._out.write(block.decode('utf-8', errors='replace'))
        except WRITE_ERRORS as e:
            shown = block if isinstance(block, str) else block.decode('utf-8', errors='replace')
            self._log_failure('UI.PrintBlock', shown, e)

    def print_error_block(self, block: str) -> None:
        # Goes to the output stream, not the error stream
        self._write(self._out, block, 'UI.PrintErrorBlock', block)

    def print_table(self, table) -> None:
        try:
            table.print(self._out)
        except Exception as e:
            self._log_failure('UI.PrintTable', None, e)

    # Input requests -----------------------------------------------------
    def ask_for_text(self, opts: TextOpts) -> str:
        try:
            value = Prompt.ask(
                opts.label,
                console=self._console,
                default=opts.default,
                show_default=bool(opts.default),
                stream=self._in,
            )
        except PROMPT_ERRORS as e:
            raise UIError(f"Asking for text: {_describe(e)}") from e
        return value

    def ask_for_choice(self, opts: ChoiceOpts) -> int:
        default_str = str(opts.default)
        if not any(choice == default_str for choice in opts.choices):
            raise UIError(
                f"Default value: {opts.default} should match with one of the choices: {opts.choices}"
            )

        numbers = [str(i + 1) for i in range(len(opts.choices))]
        default: Any = ...
        stream = self._in
        if 0 <= opts.default < len(opts.choices):
            default = opts.default + 1
        elif stream is not None:
            # No default to fall back on, so running out of input is an error
            stream = _RequiredInput(stream)

        try:
            self._console.print(opts.label, markup=False)
            for number, choice in zip(numbers, opts.choices):
                self._console.print(f"  {number}: {choice}", markup=False)
            answer = IntPrompt.ask(
                "Choose",
                console=self._console,
                choices=numbers,
                show_choices=False,
                default=default,
                stream=stream,
            )
        except PROMPT_ERRORS as e:
            raise UIError(f"Asking for choice: {_describe(e)}") from e
        return int(answer) - 1

    def ask_for_password(self, label: str) -> str:
        try:
            return Prompt.ask(label, console=self._console, password=True)
        except PROMPT_ERRORS as e:
            raise UIError(f"Asking for password: {_describe(e)}") from e

    def ask_for_confirmation(self) -> None:
        try:
            confirmed = Confirm.ask(
                self._confirm_label,
                console=self._console,
                default=False,
                stream=self._in,
            )
        except PROMPT_ERRORS as e:
            raise UIError(f"Asking for confirmation: {_describe(e)}") from e
        if not confirmed:
            raise UIError("Stopped")

    # Mode / lifecycle ---------------------------------------------------
    def is_interactive(self) -> bool:
        return True

    def flush(self) -> None:
        pass

    # Internals ----------------------------------------------------------
    def _format(self, pattern: str, args: tuple, call: str) -> str:
        try:
            return format_message(pattern, args)
        except (TypeError, ValueError) as e:
            # Mismatched verbs and args still produce a line
            message = f"{pattern} {args!r}"
            self._log_failure(call, message, e)
            return message

    def _write(self, stream: TextIO, text: str, call: str, message: str) -> None:
        try:
            stream.write(text)
        except WRITE_ERRORS as e:
            self._log_failure(call, message, e)

    def _log_failure(self, call: str, message: Optional[str], exc: BaseException) -> None:
        data = {'call': call}
        if message is not None:
            data['payload'] = message
        self._logger.error(self._log_tag, exc, data=data)


def new_console_ui(logger: Any, **kwargs: Any) -> WriterUI:
    """WriterUI bound to the process stdout/stderr."""
    return WriterUI(sys.stdout, sys.stderr, logger, **kwargs)


class _RequiredInput:
    """Input stream whose readline raises EOFError once the input is used up.

    rich.prompt re-asks on an empty read, which never ends for a prompt
    without a default.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def readline(self) -> str:
        line = self._stream.readline()
        if not line:
            raise EOFError('end of input')
        return line


def _describe(exc: BaseException) -> str:
    text = str(exc)
    return text if text else type(exc).__name__
