from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

from ui.base import UI
from ui.non_interactive import NonInteractiveUI
from ui.writer import WriterUI


def build_ui(
        config: Any,
        logger: Any,
        *,
        non_interactive: Optional[bool] = None,
        out_writer: Optional[TextIO] = None,
        err_writer: Optional[TextIO] = None,
        in_stream: Optional[TextIO] = None,
) -> UI:
    """Pick the UI for this run.

    An explicit non_interactive flag wins over [UI].non_interactive.
    """
    if non_interactive is None:
        non_interactive = bool(config.get_option('UI', 'non_interactive', fallback=False))
    confirm_label = config.get_option('UI', 'confirm_label', fallback='Continue?') or 'Continue?'

    ui: UI = WriterUI(
        out_writer if out_writer is not None else sys.stdout,
        err_writer if err_writer is not None else sys.stderr,
        logger,
        in_stream=in_stream,
        confirm_label=str(confirm_label),
    )
    if non_interactive:
        ui = NonInteractiveUI(ui, logger=logger)

    logger.ui_event('ui_selected', {'non_interactive': non_interactive, 'confirm_label': str(confirm_label)})
    return ui
