"""File planning for a page module.

Turns a :class:`~pagegen.models.Configuration` into the ordered list of
:class:`~pagegen.models.PlannedFile` objects the writer will produce.  The
architecture is dispatched once to a planner strategy; both strategies emit
the same ``PlannedFile`` shape so the writer and the pipeline stay
strategy-agnostic.  Planning never touches the filesystem.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pagegen.config import Settings
from pagegen.models import (
    AnimationIntensity,
    Architecture,
    Column,
    ColumnType,
    Configuration,
    ConfigurationInvariantViolation,
    FileRole,
    PlannedFile,
)
from pagegen.utils import pluralize, to_camel_case, to_kebab_case, to_pascal_case


# ---------------------------------------------------------------------------
# Template names per role
# ---------------------------------------------------------------------------

DDD_TEMPLATES: dict[FileRole, str] = {
    FileRole.ENTITY: "ddd/entity.ts.j2",
    FileRole.REPOSITORY_INTERFACE: "ddd/repository_interface.ts.j2",
    FileRole.REPOSITORY_IMPL: "ddd/repository_impl.ts.j2",
    FileRole.USE_CASE: "ddd/use_case.ts.j2",
    FileRole.LIST_COMPONENT: "ddd/list_component.tsx.j2",
    FileRole.PAGE: "shared/page.tsx.j2",
    FileRole.PAGE_TRANSITION: "shared/page_transition.tsx.j2",
}

SIMPLIFIED_TEMPLATES: dict[FileRole, str] = {
    FileRole.LIST_COMPONENT: "simplified/list_component.tsx.j2",
    FileRole.PAGE: "shared/page.tsx.j2",
    FileRole.PAGE_TRANSITION: "shared/page_transition.tsx.j2",
}

# intensity -> (stagger seconds, item duration seconds, transition offset px)
_ANIMATION_TIMINGS: dict[AnimationIntensity, tuple[float, float, int]] = {
    AnimationIntensity.SUBTLE: (0.03, 0.15, 4),
    AnimationIntensity.MODERATE: (0.05, 0.2, 8),
    AnimationIntensity.BOLD: (0.1, 0.3, 16),
}


# ---------------------------------------------------------------------------
# Render contexts
# ---------------------------------------------------------------------------

def _names(config: Configuration) -> dict[str, Any]:
    entity = config.entity_name
    module = config.module_name
    return {
        "entity_name": entity,
        "entity_plural": pluralize(entity),
        "entity_camel": to_camel_case(entity),
        "module_name": module,
        "module_pascal": to_pascal_case(module),
        "list_component_name": f"{entity}List",
        "use_case_name": f"Get{entity}sUseCase",
        "repository_name": f"{entity}Repository",
        "repository_interface_name": f"I{entity}Repository",
    }


_TS_TYPE_MAP: dict[ColumnType, str] = {
    ColumnType.STRING: "string",
    ColumnType.NUMBER: "number",
    ColumnType.BOOLEAN: "boolean",
    ColumnType.DATE: "string",
}

_MOCK_ROW_COUNT = 5
_MOCK_STATUSES = ("Active", "Inactive", "Pending")


def _mock_literal(column: Column, index: int) -> str:
    """Return a TypeScript literal for row *index* (1-based) of *column*."""
    if column.key == "status" and column.type == ColumnType.STRING:
        return repr(_MOCK_STATUSES[(index - 1) % len(_MOCK_STATUSES)])
    if column.type == ColumnType.NUMBER:
        return str(index * 10)
    if column.type == ColumnType.BOOLEAN:
        return "true" if index % 2 else "false"
    if column.type == ColumnType.DATE:
        return repr(f"2025-01-{index:02d}T00:00:00.000Z")
    return repr(f"{column.label} {index}")


def _enrich_column(column: Column) -> dict[str, Any]:
    return {**column.model_dump(mode="json"), "ts_type": _TS_TYPE_MAP[column.type]}


def _mock_rows(config: Configuration) -> list[dict[str, Any]]:
    return [
        {
            "id": repr(str(index)),
            "fields": [(c.key, _mock_literal(c, index)) for c in config.columns],
        }
        for index in range(1, _MOCK_ROW_COUNT + 1)
    ]


def _entity_context(config: Configuration) -> dict[str, Any]:
    return {
        **_names(config),
        "columns": [_enrich_column(c) for c in config.columns],
        "search_keys": [c.key for c in config.columns if c.type == ColumnType.STRING],
        "mock_rows": _mock_rows(config),
    }


def _animation_context(config: Configuration) -> dict[str, Any]:
    stagger, duration, offset = _ANIMATION_TIMINGS[config.animations.intensity]
    animations = config.animations
    return {
        "animations": animations.model_dump(mode="json"),
        "has_motion": animations.list_animations or animations.card_animations,
        "stagger": stagger,
        "duration": duration,
        "offset": offset,
    }


def _component_context(config: Configuration, route_url: str) -> dict[str, Any]:
    return {
        **_entity_context(config),
        **_animation_context(config),
        "page_name": config.page_name,
        "route_path": config.route_path,
        "route_url": route_url,
        "architecture": config.architecture.value,
        "filters": [f.model_dump(mode="json") for f in config.filters],
        "include_stats": config.include_stats,
        "include_row_selection": config.include_row_selection,
        "include_search": config.include_search,
        "data_fetching": config.data_fetching.value,
        "is_tanstack": config.is_tanstack,
        "sortable_columns": list(config.sortable_columns),
        "has_date_filter": config.has_date_filter,
        "col_span": len(config.columns) + 2 + (1 if config.include_row_selection else 0),
    }


def _page_context(config: Configuration, component_import: str) -> dict[str, Any]:
    return {
        **_names(config),
        "page_name": config.page_name,
        "page_slug": to_kebab_case(config.page_name),
        "route_path": config.route_path,
        "architecture": config.architecture.value,
        "component_import": component_import,
    }


def _transition_context(config: Configuration) -> dict[str, Any]:
    return {"page_name": config.page_name, **_animation_context(config)}


# ---------------------------------------------------------------------------
# Planner strategies
# ---------------------------------------------------------------------------

class _BasePlanner:
    templates: dict[FileRole, str] = {}

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def plan(self, config: Configuration) -> list[PlannedFile]:
        raise NotImplementedError

    def route_dir(self, config: Configuration) -> Path:
        return self.settings.routes_path.joinpath(*config.route_path.split("/"))

    def route_url(self, config: Configuration) -> str:
        return f"/{config.route_path}"

    def _planned(self, role: FileRole, path: Path, context: dict[str, Any]) -> PlannedFile:
        return PlannedFile(role=role, path=path, template=self.templates[role], context=context)

    def _route_files(self, config: Configuration, component_import: str) -> list[PlannedFile]:
        route_dir = self.route_dir(config)
        files = [
            self._planned(
                FileRole.PAGE,
                route_dir / "page.tsx",
                _page_context(config, component_import),
            )
        ]
        if config.animations.page_transitions:
            files.append(
                self._planned(
                    FileRole.PAGE_TRANSITION,
                    route_dir / "template.tsx",
                    _transition_context(config),
                )
            )
        return files


class DDDPlanner(_BasePlanner):
    """One file per layer under ``modules/<module>``, plus the route page."""

    architecture = Architecture.DDD
    templates = DDD_TEMPLATES

    def module_dir(self, config: Configuration) -> Path:
        return self.settings.modules_path / config.module_name

    def plan(self, config: Configuration) -> list[PlannedFile]:
        module = config.module_name
        module_dir = self.module_dir(config)
        entity_ctx = _entity_context(config)
        component_ctx = _component_context(config, self.route_url(config))
        component_import = (
            f"@/{self.settings.modules_dir}/{module}/presentation/components/{module}-list"
        )

        files = [
            self._planned(
                FileRole.ENTITY,
                module_dir / "domain" / "entities" / f"{module}.entity.ts",
                entity_ctx,
            ),
            self._planned(
                FileRole.REPOSITORY_INTERFACE,
                module_dir / "domain" / "repositories" / f"{module}.repository.interface.ts",
                entity_ctx,
            ),
            self._planned(
                FileRole.REPOSITORY_IMPL,
                module_dir / "infrastructure" / "repositories" / f"{module}.repository.ts",
                entity_ctx,
            ),
            self._planned(
                FileRole.USE_CASE,
                module_dir / "application" / "use-cases" / f"get-{module}s.use-case.ts",
                _names(config),
            ),
            self._planned(
                FileRole.LIST_COMPONENT,
                module_dir / "presentation" / "components" / f"{module}-list.tsx",
                component_ctx,
            ),
        ]
        files.extend(self._route_files(config, component_import))
        return files


class SimplifiedPlanner(_BasePlanner):
    """A single list component under ``components/<module>`` plus the route page."""

    architecture = Architecture.SIMPLIFIED
    templates = SIMPLIFIED_TEMPLATES

    def component_dir(self, config: Configuration) -> Path:
        return self.settings.components_path / config.module_name

    def plan(self, config: Configuration) -> list[PlannedFile]:
        module = config.module_name
        component_import = f"@/{self.settings.components_dir}/{module}/{module}-list"

        files = [
            self._planned(
                FileRole.LIST_COMPONENT,
                self.component_dir(config) / f"{module}-list.tsx",
                _component_context(config, self.route_url(config)),
            )
        ]
        files.extend(self._route_files(config, component_import))
        return files


_PLANNERS: dict[Architecture, type[_BasePlanner]] = {
    Architecture.DDD: DDDPlanner,
    Architecture.SIMPLIFIED: SimplifiedPlanner,
}


def planner_for(config: Configuration, settings: Settings) -> _BasePlanner:
    """Select the planner strategy for ``config.architecture``."""
    return _PLANNERS[config.architecture](settings)


def plan_files(config: Configuration, settings: Settings) -> list[PlannedFile]:
    """Plan every output file for *config*.

    Raises:
        ConfigurationInvariantViolation: If two roles resolve to the same path.
    """
    files = planner_for(config, settings).plan(config)
    _ensure_distinct_paths(files)
    return files


def _ensure_distinct_paths(files: list[PlannedFile]) -> None:
    seen: dict[Path, FileRole] = {}
    for planned in files:
        other = seen.get(planned.path)
        if other is not None:
            raise ConfigurationInvariantViolation(
                f"Planned files '{other.value}' and '{planned.role.value}' "
                f"share the path {planned.path}"
            )
        seen[planned.path] = planned.role
