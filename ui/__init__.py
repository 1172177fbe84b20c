"""Console UI adapters for command-line tools.

WriterUI prints to real streams and prompts on the terminal;
NonInteractiveUI wraps another UI and answers prompts from defaults.
Callers choose once (see build_ui) and use either through the UI interface.
"""

from ui.base import UI, ChoiceOpts, TextOpts
from ui.factory import build_ui
from ui.non_interactive import NonInteractiveUI
from ui.recording import RecordingUI
from ui.table import Table
from ui.writer import WriterUI, new_console_ui

__all__ = [
    "UI",
    "TextOpts",
    "ChoiceOpts",
    "Table",
    "WriterUI",
    "NonInteractiveUI",
    "RecordingUI",
    "build_ui",
    "new_console_ui",
]
