"""Progress output on stdout.

CI services kill jobs that stay silent for too long, so progress is written
as bare characters (``>`` while sessions start, ``.`` while jobs run) between
the human-readable result lines.
"""

import sys
from dataclasses import dataclass, field
from typing import TextIO

SESSION_TICK = ">"
JOB_TICK = "."


@dataclass(frozen=True, kw_only=True)
class ProgressStream:
    """Writes progress characters and result lines to a text stream."""

    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def tick(self, char: str) -> None:
        """Write a single progress character."""
        self.stream.write(char)
        self.stream.flush()

    def line(self, text: str) -> None:
        """Write a line, starting on a fresh line after any ticks."""
        print(f"\n{text}", file=self.stream, flush=True)
