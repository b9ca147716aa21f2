from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""File-level progress bar for import runs (tqdm, TTY only).

The bar goes to stderr next to the labeled log lines; stdout is reserved for
the generated Thing Description. Without a terminal (CI, pipes) nothing is
drawn and every method is a no-op apart from the counters.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stderr.isatty()


class ProgressTracker:
    """Counts imported / failed files and mirrors them on a tqdm bar."""

    def __init__(self, total_files: int, *, description: str = "Importing files") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.succeeded = 0
        self.failed = 0
        self.properties = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = self._open_bar() if self.enabled else None

    def _open_bar(self) -> TqdmType[Any]:
        return tqdm(
            total=self.total_files,
            desc=self.description,
            unit="file",
            leave=False,
            ncols=80,
            ascii=True,
            file=sys.stderr,
        )

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, success: bool = True, properties: int = 0) -> None:
        """Count one finished file; ``properties`` is what it contributed."""
        if success:
            self.succeeded += 1
            self.properties += properties
        else:
            self.failed += 1
        if self.pbar is None:
            return
        self.pbar.set_description(self.description)
        self.pbar.set_postfix(properties=self.properties, failed=self.failed)
        self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
