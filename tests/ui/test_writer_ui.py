from __future__ import annotations

import io
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import ui.writer as writer_mod
from base_classes import UIError
from ui.base import ChoiceOpts, TextOpts
from ui.table import Table
from ui.writer import WriterUI, new_console_ui


class FakeLogger:
    def __init__(self):
        self.errors = []

    def error(self, where, exc, *, stack=None, data=None):
        self.errors.append((where, exc, data or {}))


class BrokenStream(io.StringIO):
    def write(self, s):
        raise OSError("disk full")


class TTYStream(io.StringIO):
    def isatty(self):
        return True


def _ui(stdin: str = '', out=None, err=None, logger=None):
    out = out if out is not None else io.StringIO()
    err = err if err is not None else io.StringIO()
    logger = logger if logger is not None else FakeLogger()
    return WriterUI(out, err, logger, in_stream=io.StringIO(stdin)), out, err, logger


def test_line_methods_route_to_out_and_err():
    ui, out, err, _ = _ui()
    ui.print_linef("x=%d", 5)
    ui.begin_linef("start %s ", "a")
    ui.end_linef("end")
    ui.error_linef("bad %s", "thing")
    assert out.getvalue() == "x=5\nstart a end\n"
    assert err.getvalue() == "bad thing\n"


def test_pattern_without_args_is_written_verbatim():
    ui, out, _, _ = _ui()
    ui.print_linef("100% done")
    assert out.getvalue() == "100% done\n"


def test_mismatched_pattern_args_are_written_and_logged():
    ui, out, err, logger = _ui()
    ui.print_linef("x=%d %d", 5)
    ui.error_linef("bad %q", 1)
    ui.begin_linef("%d", "nan")
    ui.end_linef("done")
    assert out.getvalue() == "x=%d %d (5,)\n%d ('nan',)done\n"
    assert err.getvalue() == "bad %q (1,)\n"
    assert [data['call'] for _, _, data in logger.errors] == [
        'UI.PrintLinef', 'UI.ErrorLinef', 'UI.BeginLinef',
    ]
    _, exc, data = logger.errors[0]
    assert isinstance(exc, TypeError)
    assert data['payload'] == "x=%d %d (5,)"
    assert isinstance(logger.errors[1][1], ValueError)


def test_print_error_block_goes_to_output_stream():
    ui, out, err, _ = _ui()
    ui.print_error_block("boom\n")
    assert out.getvalue() == "boom\n"
    assert err.getvalue() == ""


def test_print_block_writes_bytes_verbatim():
    raw = io.BytesIO()
    out = io.TextIOWrapper(raw, encoding='utf-8')
    ui, _, _, _ = _ui(out=out)
    ui.print_linef("head")
    ui.print_block(b"\x00raw\xff")
    out.flush()
    assert raw.getvalue() == b"head\n\x00raw\xff"


def test_print_block_on_text_only_stream_decodes():
    ui, out, _, _ = _ui()
    ui.print_block("café".encode('utf-8'))
    assert out.getvalue() == "café"


def test_write_failures_are_logged_not_raised():
    logger = FakeLogger()
    ui, _, _, _ = _ui(out=BrokenStream(), err=BrokenStream(), logger=logger)
    ui.print_linef("x=%d", 1)
    ui.error_linef("e")
    ui.begin_linef("b")
    ui.end_linef("n")
    ui.print_block(b"blk")
    ui.print_error_block("eb")
    calls = [data['call'] for _, _, data in logger.errors]
    assert calls == [
        'UI.PrintLinef', 'UI.ErrorLinef', 'UI.BeginLinef',
        'UI.EndLinef', 'UI.PrintBlock', 'UI.PrintErrorBlock',
    ]
    where, exc, data = logger.errors[0]
    assert where == 'ui'
    assert isinstance(exc, OSError)
    assert data['payload'] == 'x=1'


def test_print_table_renders_headers_and_cells():
    ui, out, _, _ = _ui()
    ui.print_table(Table(headers=['Name', 'Size'], rows=[['alpha', 1], ['beta', None]]))
    text = out.getvalue()
    for cell in ('Name', 'Size', 'alpha', '1', 'beta'):
        assert cell in text


def test_print_table_failure_is_logged():
    class ExplodingTable:
        def print(self, stream):
            raise RuntimeError("render failed")

    ui, _, _, logger = _ui()
    ui.print_table(ExplodingTable())
    assert len(logger.errors) == 1
    _, exc, data = logger.errors[0]
    assert str(exc) == "render failed"
    assert data == {'call': 'UI.PrintTable'}


def test_ask_for_text_reads_answer():
    ui, _, _, _ = _ui("hello\n")
    assert ui.ask_for_text(TextOpts(label="Name", default="bob")) == "hello"


def test_ask_for_text_uses_default_at_end_of_input():
    ui, _, _, _ = _ui("")
    assert ui.ask_for_text(TextOpts(label="Name", default="bob")) == "bob"


def test_ask_for_text_wraps_engine_failure(monkeypatch):
    def fake_ask(*args, **kwargs):
        raise EOFError()

    monkeypatch.setattr(writer_mod.Prompt, 'ask', fake_ask)
    ui, _, _, _ = _ui()
    with pytest.raises(UIError) as ei:
        ui.ask_for_text(TextOpts(label="Name"))
    assert str(ei.value) == "Asking for text: EOFError"
    assert isinstance(ei.value.__cause__, EOFError)


def test_ask_for_choice_rejects_default_not_matching_choice_text(monkeypatch):
    def fail_ask(*args, **kwargs):
        raise AssertionError("prompt engine must not be invoked")

    monkeypatch.setattr(writer_mod.IntPrompt, 'ask', fail_ask)
    ui, _, _, _ = _ui()
    with pytest.raises(UIError) as ei:
        ui.ask_for_choice(ChoiceOpts(label="Pick", default=1, choices=["a", "b", "c"]))
    assert "Default value: 1 should match with one of the choices" in str(ei.value)
    assert "'a'" in str(ei.value)


def test_ask_for_choice_rejects_empty_choices():
    ui, _, _, _ = _ui()
    with pytest.raises(UIError):
        ui.ask_for_choice(ChoiceOpts(label="Pick", default=0, choices=[]))


def test_ask_for_choice_returns_selected_index():
    ui, out, _, _ = _ui("3\n")
    index = ui.ask_for_choice(ChoiceOpts(label="Pick", default=1, choices=["0", "1", "2"]))
    assert index == 2
    assert "Pick" in out.getvalue()
    assert "1: 0" in out.getvalue()


def test_ask_for_choice_keeps_default_at_end_of_input():
    ui, _, _, _ = _ui("")
    assert ui.ask_for_choice(ChoiceOpts(label="Pick", default=1, choices=["0", "1", "2"])) == 1


def test_ask_for_choice_without_usable_default_fails_at_end_of_input():
    # "5" matches a label but is not a position, so nothing is preselected
    ui, _, _, _ = _ui("")
    with pytest.raises(UIError) as ei:
        ui.ask_for_choice(ChoiceOpts(label="Pick", default=5, choices=["x", "5"]))
    assert str(ei.value) == "Asking for choice: end of input"
    assert isinstance(ei.value.__cause__, EOFError)


def test_ask_for_choice_without_usable_default_retries_then_fails():
    ui, out, _, _ = _ui("9\n")
    with pytest.raises(UIError) as ei:
        ui.ask_for_choice(ChoiceOpts(label="Pick", default=5, choices=["x", "5"]))
    assert str(ei.value) == "Asking for choice: end of input"
    assert out.getvalue().count("Choose") == 2


def test_ask_for_choice_without_usable_default_accepts_answer():
    ui, _, _, _ = _ui("2\n")
    assert ui.ask_for_choice(ChoiceOpts(label="Pick", default=5, choices=["x", "5"])) == 1


def test_ask_for_choice_wraps_engine_failure(monkeypatch):
    def fake_ask(*args, **kwargs):
        raise KeyboardInterrupt()

    monkeypatch.setattr(writer_mod.IntPrompt, 'ask', fake_ask)
    ui, _, _, _ = _ui()
    with pytest.raises(UIError) as ei:
        ui.ask_for_choice(ChoiceOpts(label="Pick", default=0, choices=["0", "x"]))
    assert str(ei.value).startswith("Asking for choice: ")


def test_ask_for_password_uses_masked_prompt(monkeypatch):
    seen = {}

    def fake_ask(label, **kwargs):
        seen['label'] = label
        seen['password'] = kwargs.get('password')
        return "s3cret"

    monkeypatch.setattr(writer_mod.Prompt, 'ask', fake_ask)
    ui, _, _, _ = _ui()
    assert ui.ask_for_password("Password") == "s3cret"
    assert seen == {'label': "Password", 'password': True}


def test_ask_for_password_wraps_engine_failure(monkeypatch):
    def fake_ask(*args, **kwargs):
        raise OSError("no tty")

    monkeypatch.setattr(writer_mod.Prompt, 'ask', fake_ask)
    ui, _, _, _ = _ui()
    with pytest.raises(UIError) as ei:
        ui.ask_for_password("Password")
    assert str(ei.value) == "Asking for password: no tty"


def test_ask_for_confirmation_accepts_yes():
    ui, _, _, _ = _ui("y\n")
    assert ui.ask_for_confirmation() is None


def test_ask_for_confirmation_default_is_stopped():
    ui, out, _, _ = _ui("")
    with pytest.raises(UIError) as ei:
        ui.ask_for_confirmation()
    assert str(ei.value) == "Stopped"
    assert "Continue?" in out.getvalue()


def test_ask_for_confirmation_no_is_stopped():
    ui, _, _, _ = _ui("n\n")
    with pytest.raises(UIError) as ei:
        ui.ask_for_confirmation()
    assert str(ei.value) == "Stopped"


def test_ask_for_confirmation_wraps_engine_failure(monkeypatch):
    def fake_ask(*args, **kwargs):
        raise KeyboardInterrupt()

    monkeypatch.setattr(writer_mod.Confirm, 'ask', fake_ask)
    ui, _, _, _ = _ui()
    with pytest.raises(UIError) as ei:
        ui.ask_for_confirmation()
    assert str(ei.value) == "Asking for confirmation: KeyboardInterrupt"


def test_is_interactive_ignores_tty_state():
    ui, _, _, _ = _ui()
    assert ui.is_tty() is False
    assert ui.is_interactive() is True

    tty_ui, _, _, _ = _ui(out=TTYStream())
    assert tty_ui.is_tty() is True
    assert tty_ui.is_interactive() is True


def test_flush_is_noop():
    ui, out, _, _ = _ui()
    ui.flush()
    assert out.getvalue() == ""


def test_new_console_ui_binds_process_streams(capsys):
    ui = new_console_ui(FakeLogger())
    ui.print_linef("hi %s", "there")
    ui.error_linef("bad")
    captured = capsys.readouterr()
    assert captured.out == "hi there\n"
    assert captured.err == "bad\n"
