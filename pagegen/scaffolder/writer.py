"""Writes planned files to disk.

Every :class:`~pagegen.models.PlannedFile` is rendered before anything is
written, then files are written in plan order.  Writes are not atomic: when
one fails, the files written before it stay on disk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from pagegen.events import EventKind, EventSink, GenerationEvent, null_sink
from pagegen.models import GeneratedFile, PlannedFile
from pagegen.utils import capitalize, ensure_dir, relative_to_root
from pagegen.scaffolder.templates import TemplateRenderer


class WriteConflict(Exception):
    """Raised when a target file exists and overwriting was not allowed."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File already exists: {path}")


class FilesystemFailure(Exception):
    """Raised when a directory or file could not be created."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        super().__init__(f"Could not write {path}: {cause}")


class RenderFailure(Exception):
    """Raised when a planned file's template could not be rendered."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        super().__init__(f"{path.name}: {cause}")


def _write_file(path: Path, content: str) -> None:
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")


class FileWriter:
    """Renders and writes planned files one at a time.

    Args:
        renderer: Renders each planned file's template.
        sink: Receives one ``file_created`` / ``file_updated`` event per write.
        root: Paths in event messages are shown relative to this directory.
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        sink: EventSink = null_sink,
        root: Path | None = None,
    ) -> None:
        self.renderer = renderer
        self.sink = sink
        self.root = root

    def find_conflicts(self, planned: list[PlannedFile]) -> list[Path]:
        """Return the planned paths that already exist, in plan order."""
        return [p.path for p in planned if p.path.exists()]

    def render(self, planned: list[PlannedFile]) -> list[GeneratedFile]:
        """Render every planned file without touching the filesystem.

        ``action`` reports what a write would do to each target right now.

        Raises:
            RenderFailure: If any template fails to render.
        """
        return [
            GeneratedFile(
                path=p.path,
                content=self._render_one(p),
                action="updated" if p.path.exists() else "created",
            )
            for p in planned
        ]

    async def write(self, planned: list[PlannedFile], overwrite: bool) -> list[GeneratedFile]:
        """Render all of *planned*, then write it in order.

        Nothing is written when a template fails to render.

        Raises:
            RenderFailure: If any template fails to render.
            WriteConflict: If a target exists and *overwrite* is false.  Files
                earlier in the plan have already been written.
            FilesystemFailure: On any ``OSError`` while writing.
        """
        rendered = self.render(planned)

        written: list[GeneratedFile] = []
        for item in rendered:
            existed = item.path.exists()
            if existed and not overwrite:
                raise WriteConflict(item.path)

            try:
                await asyncio.to_thread(_write_file, item.path, item.content)
            except OSError as exc:
                raise FilesystemFailure(item.path, exc) from exc

            item.action = "updated" if existed else "created"
            written.append(item)
            self.sink(
                GenerationEvent(
                    kind=EventKind.FILE_UPDATED if existed else EventKind.FILE_CREATED,
                    message=f"{capitalize(item.action)} {self._display(item.path)}",
                    path=item.path,
                )
            )
        return written

    def _render_one(self, planned: PlannedFile) -> str:
        # Template code can fail with plain Python errors as well as jinja2 ones.
        try:
            return self.renderer.render_planned(planned)
        except Exception as exc:
            raise RenderFailure(planned.path, exc) from exc

    def _display(self, path: Path) -> str:
        return relative_to_root(path, self.root) if self.root else str(path)
