from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.report_models import Section
from ..models.tabular import TabularData

"""Section progress display with tqdm (TTY only).

In non-TTY environments (CI, redirected output) no bar is created so the log
output stays free of control sequences.
"""

__all__ = [
    "SectionProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class SectionProgress:
    """Progress bar over report sections.

    Pass ``advance`` as the ``on_section`` callback of a renderer.
    Also counts the rendered rows for the run summary.
    """

    def __init__(self, total_sections: int, *, description: str = "Rendering sections") -> None:
        self.total_sections = total_sections
        self.description = description
        self.rendered_sections = 0
        self.rendered_rows = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_sections,
                desc=description,
                unit="section",
                leave=False,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, section: Section, data: TabularData) -> None:
        self.rendered_sections += 1
        self.rendered_rows += data.row_count
        if self.pbar is not None:
            self.pbar.set_postfix(rows=self.rendered_rows)
            self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> SectionProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
