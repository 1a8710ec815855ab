"""Required shadcn/ui component detection.

Maps a :class:`~pagegen.models.Configuration` to the shadcn component
identifiers the generated presentation code imports.  Pure: no I/O.
"""

from __future__ import annotations

from pagegen.models import Configuration

# Every shadcn component the generated list code may import.
COMPONENT_MAP: dict[str, str] = {
    "button": "button",
    "table": "table",
    "select": "select",
    "input": "input",
    "badge": "badge",
    "card": "card",
    "checkbox": "checkbox",
    "calendar": "calendar",
    "popover": "popover",
    "pagination": "pagination",
    "dropdown": "dropdown-menu",
}

BASELINE_COMPONENTS: tuple[str, ...] = (
    COMPONENT_MAP["button"],
    COMPONENT_MAP["table"],
    COMPONENT_MAP["select"],
    COMPONENT_MAP["input"],
    COMPONENT_MAP["badge"],
    COMPONENT_MAP["card"],
    COMPONENT_MAP["pagination"],
    COMPONENT_MAP["dropdown"],
)

ROW_SELECTION_COMPONENTS: tuple[str, ...] = (COMPONENT_MAP["checkbox"],)

DATE_FILTER_COMPONENTS: tuple[str, ...] = (
    COMPONENT_MAP["calendar"],
    COMPONENT_MAP["popover"],
)


def resolve_required_components(config: Configuration) -> tuple[str, ...]:
    """Return the component identifiers *config* needs, in a stable order.

    The baseline is always present; feature flags only ever add members.
    """
    required: list[str] = list(BASELINE_COMPONENTS)

    if config.include_row_selection:
        required.extend(ROW_SELECTION_COMPONENTS)

    if config.has_date_filter:
        required.extend(DATE_FILTER_COMPONENTS)

    return tuple(dict.fromkeys(required))
