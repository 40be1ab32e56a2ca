"""Console progress reporting for pages and downloads"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

if TYPE_CHECKING:
    from fav_downloader.src.infrastructure.loggers.base import RichLogger


class ProgressReporter:
    """
    Shows progress bars for pages and downloads.

    Bars are rendered on the logger console, so log messages don't break them.
    """

    def __init__(self, logger: RichLogger) -> None:
        self.logger = logger
        self._progress = Progress(
            TextColumn('{task.description}'),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=logger.console,
            transient=True,
        )

    def start(self) -> None:
        self._progress.start()

    def stop(self) -> None:
        self._progress.stop()

    def create_task(
        self,
        description: str,
        total: int | None = None,
        indent_level: int = 0,
    ) -> TaskID:
        indent = '  ' * indent_level
        return self._progress.add_task(f'{indent}{description}', total=total)

    def update_task(
        self,
        task_id: TaskID,
        advance: int = 0,
        description: str | None = None,
    ) -> None:
        self._progress.update(task_id, advance=advance, description=description)

    def complete_task(self, task_id: TaskID) -> None:
        self._progress.remove_task(task_id)
