"""Rich-based reconciliation progress display."""

from __future__ import annotations

from types import TracebackType
from typing import ClassVar

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from contentsync.cli.common import pluralize
from contentsync.engine.progress import SyncProgress


class RichSyncProgress(SyncProgress):
    """Live terminal progress for one analyze/apply run, drawn on stderr.

    Use as a context manager so the live display is started and stopped::

        with RichSyncProgress() as progress:
            engine = await ContentSync.from_config(config, progress=progress)
            report = await engine.analyze()

    The ``Fetch`` and ``Diff`` passes that run inside ``Verify`` get their
    own rows tagged ``verify``, so the first analysis stays readable above
    them. The ``Apply`` row names how many items the batch holds.
    """

    _PHASE_STYLES: ClassVar[dict[str, str]] = {
        "Fetch": "cyan",
        "Diff": "blue",
        "Apply": "green",
        "Verify": "magenta",
    }

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>22}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self._console,
            transient=False,
        )
        self._task_ids: dict[str, RichTaskID] = {}
        self._verifying = False

    def __enter__(self) -> RichSyncProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str, total: int | None = None) -> None:
        if phase == "Verify":
            self._verifying = True
        self._task_ids[phase] = self._progress.add_task(self._describe(phase, total), total=total)

    def item_done(self, phase: str) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is not None:
            self._progress.advance(task_id)

    def phase_done(self, phase: str) -> None:
        if phase == "Verify":
            self._verifying = False
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        task = self._progress.tasks[task_id]
        if task.total is not None:
            self._progress.update(task_id, completed=task.total)
        else:
            self._progress.update(task_id, total=1, completed=1)

    def phase_error(self, phase: str, error: BaseException) -> None:
        if phase == "Verify":
            self._verifying = False
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        self._progress.update(task_id, description=f"[red]✗ {phase} ({type(error).__name__})[/red]")

    def _describe(self, phase: str, total: int | None) -> str:
        style = self._PHASE_STYLES.get(phase)
        text = f"[{style}]{phase}[/]" if style else phase
        if phase == "Apply" and total is not None:
            text = f"{text} {pluralize(total, 'item')}"
        elif self._verifying and phase != "Verify":
            text = f"{text} [dim]verify[/]"
        return text
