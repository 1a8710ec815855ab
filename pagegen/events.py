"""Progress and warning events emitted by the generation core.

The planner, installer, writer and pipeline never print.  They report what
they do to an injected *event sink*: any callable accepting a
:class:`GenerationEvent`.  The CLI passes a :class:`ConsoleEventSink` that
renders with Rich; tests pass a :class:`RecordingEventSink`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from rich.markup import escape

from pagegen.utils import console, print_dim, print_error, print_info, print_success, print_warning


class EventKind(str, Enum):
    """Category of a :class:`GenerationEvent`."""
    STAGE = "stage"
    INFO = "info"
    COMPONENT_PRESENT = "component_present"
    COMPONENT_INSTALLING = "component_installing"
    COMPONENT_INSTALLED = "component_installed"
    COMPONENT_FAILED = "component_failed"
    PRECONDITION_UNMET = "precondition_unmet"
    CONFLICT = "conflict"
    FILE_CREATED = "file_created"
    FILE_UPDATED = "file_updated"
    WARNING = "warning"


WARNING_KINDS = frozenset(
    {
        EventKind.COMPONENT_FAILED,
        EventKind.PRECONDITION_UNMET,
        EventKind.CONFLICT,
        EventKind.WARNING,
    }
)


@dataclass(frozen=True)
class GenerationEvent:
    """A single progress or warning notification."""

    kind: EventKind
    message: str
    path: Optional[Path] = None
    component: Optional[str] = None

    @property
    def is_warning(self) -> bool:
        return self.kind in WARNING_KINDS


EventSink = Callable[[GenerationEvent], None]


def null_sink(event: GenerationEvent) -> None:
    """Discard every event."""


class RecordingEventSink:
    """Collects events in emission order."""

    def __init__(self) -> None:
        self.events: list[GenerationEvent] = []

    def __call__(self, event: GenerationEvent) -> None:
        self.events.append(event)

    def of_kind(self, *kinds: EventKind) -> list[GenerationEvent]:
        return [e for e in self.events if e.kind in kinds]

    @property
    def warnings(self) -> list[GenerationEvent]:
        return [e for e in self.events if e.is_warning]


class ConsoleEventSink:
    """Renders events on the shared Rich console."""

    def __init__(self, verbose: bool = True) -> None:
        self.verbose = verbose

    def __call__(self, event: GenerationEvent) -> None:
        message = escape(event.message)
        kind = event.kind

        if kind == EventKind.STAGE:
            console.print()
            console.print(f"[bold cyan]{message}[/bold cyan]")
        elif kind == EventKind.COMPONENT_INSTALLED:
            print_success(f"  + {message}")
        elif kind == EventKind.COMPONENT_FAILED:
            print_error(f"  x {message}")
        elif event.is_warning:
            print_warning(message)
        elif kind in (EventKind.FILE_CREATED, EventKind.FILE_UPDATED, EventKind.COMPONENT_PRESENT):
            if self.verbose:
                print_dim(f"  {message}")
        else:
            print_info(message)
