"""Data model for page generation.

Defines the immutable :class:`Configuration` that fully describes one
generation request, together with the value objects that flow between the
planner, the component installer, the file writer and the pipeline.

Configuration documents use camelCase keys (``pageName``, ``routePath``, ...);
Python code uses the snake_case attribute names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from pagegen.utils import to_kebab_case, to_pascal_case


class ConfigurationInvariantViolation(ValueError):
    """Raised when a malformed configuration reaches the generator.

    Always raised before any filesystem or installer I/O happens.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or [message]
        super().__init__(message)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Architecture(str, Enum):
    """File layout strategy."""
    DDD = "ddd"
    SIMPLIFIED = "simplified"


class DataFetching(str, Enum):
    """How the generated list component loads its rows."""
    MOCK = "mock"
    TANSTACK = "tanstack"
    FETCH = "fetch"


class ColumnType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


class FilterType(str, Enum):
    SELECT = "select"
    DATE = "date"
    INPUT = "input"
    MULTISELECT = "multiselect"


class AnimationIntensity(str, Enum):
    """Framer Motion animation strength."""
    SUBTLE = "subtle"
    MODERATE = "moderate"
    BOLD = "bold"


class FileRole(str, Enum):
    """Which template produces a planned file."""
    ENTITY = "entity"
    REPOSITORY_INTERFACE = "repository_interface"
    REPOSITORY_IMPL = "repository_impl"
    USE_CASE = "use_case"
    LIST_COMPONENT = "list_component"
    PAGE = "page"
    PAGE_TRANSITION = "page_transition"


# ---------------------------------------------------------------------------
# Validators (shared with the CLI)
# ---------------------------------------------------------------------------

_ROUTE_PATH_RE = re.compile(r"^[a-z0-9\-/]+$")
_IDENTIFIER_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_\-]*$")
_COLUMN_KEY_RE = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")


def clean_route_path(value: str) -> str:
    """Strip surrounding whitespace and slashes from a user-typed route."""
    return value.strip().strip("/")


def validate_route_path(value: str) -> str:
    """Return *value* if it is a valid route path, else raise ``ValueError``."""
    if not value:
        raise ValueError("Route path is required")
    if not _ROUTE_PATH_RE.match(value):
        raise ValueError(
            "Route path can only contain lowercase letters, numbers, dashes, and slashes"
        )
    if value.startswith("/") or value.endswith("/") or "//" in value:
        raise ValueError("Route path must not have leading, trailing or repeated slashes")
    return value


def validate_identifier(value: str) -> str:
    """Return *value* if it is a valid module identifier, else raise ``ValueError``."""
    if not value:
        raise ValueError("This field is required")
    if not _IDENTIFIER_RE.match(value):
        raise ValueError(
            "Must start with a letter and contain only letters, numbers, "
            "underscores, and dashes"
        )
    return value


def validate_column_key(value: str) -> str:
    """Return *value* if it is a valid JavaScript identifier, else raise ``ValueError``."""
    if not value:
        raise ValueError("Column key is required")
    if not _COLUMN_KEY_RE.match(value):
        raise ValueError("Column key must be a valid JavaScript identifier (camelCase recommended)")
    return value


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------

class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class Column(_FrozenModel):
    """A table column of the generated list."""
    label: str = Field(..., min_length=1, description="Header text")
    key: str = Field(..., description="Property name on the entity")
    type: ColumnType = Field(default=ColumnType.STRING)
    sortable: bool = Field(default=False)

    @field_validator("key")
    @classmethod
    def _check_key(cls, value: str) -> str:
        return validate_column_key(value)


class Filter(_FrozenModel):
    """A filter control bound to a URL search parameter."""
    type: FilterType = Field(...)
    label: str = Field(..., min_length=1)
    key: str = Field(..., description="URL search parameter name")
    options: tuple[str, ...] = Field(
        default=(), description="Choices for select/multiselect filters"
    )

    @field_validator("key")
    @classmethod
    def _check_key(cls, value: str) -> str:
        return validate_column_key(value)


class AnimationConfig(_FrozenModel):
    """Framer Motion switches for the generated page."""
    page_transitions: bool = Field(default=False)
    list_animations: bool = Field(default=False)
    card_animations: bool = Field(default=False)
    intensity: AnimationIntensity = Field(default=AnimationIntensity.MODERATE)

    @property
    def any_enabled(self) -> bool:
        return self.page_transitions or self.list_animations or self.card_animations


DEFAULT_COLUMNS: tuple[Column, ...] = (
    Column(label="Name", key="name", type=ColumnType.STRING, sortable=True),
    Column(label="Status", key="status", type=ColumnType.STRING, sortable=True),
    Column(label="Created At", key="createdAt", type=ColumnType.DATE, sortable=True),
)


def _lookup(data: dict[str, Any], alias: str, name: str) -> Any:
    return data[alias] if alias in data else data.get(name)


def _fill_name_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Derive missing ``routePath``, ``moduleName`` and ``entityName``.

    ``routePath`` defaults to the kebab-cased page name, ``moduleName`` to the
    route with ``/`` replaced by ``-`` and ``entityName`` to the PascalCased
    page name.  Explicit values are never touched.
    """
    page_name = _lookup(data, "pageName", "page_name")
    if not isinstance(page_name, str) or not page_name.strip():
        return data

    filled = dict(data)
    if _lookup(data, "routePath", "route_path") is None:
        filled["routePath"] = to_kebab_case(page_name)
    route = _lookup(filled, "routePath", "route_path")
    if _lookup(data, "moduleName", "module_name") is None and isinstance(route, str):
        filled["moduleName"] = clean_route_path(route).replace("/", "-")
    if _lookup(data, "entityName", "entity_name") is None:
        filled["entityName"] = to_pascal_case(page_name)
    return filled


def _derive_sortable_flags(data: dict[str, Any]) -> dict[str, Any]:
    """Set every ``Column.sortable`` from ``sortableColumns``, or the reverse.

    Shapes that cannot be normalized are passed through untouched so that
    field validation reports them.
    """
    raw_columns = data.get("columns")
    if raw_columns is not None and not isinstance(raw_columns, (list, tuple)):
        return data

    columns: list[dict[str, Any]] = []
    for column in raw_columns or DEFAULT_COLUMNS:
        if isinstance(column, BaseModel):
            columns.append(column.model_dump())
        elif isinstance(column, dict):
            columns.append(dict(column))
        else:
            return data
        if not isinstance(columns[-1].get("key", ""), str):
            return data

    if "sortableColumns" in data or "sortable_columns" in data:
        raw_sortable = _lookup(data, "sortableColumns", "sortable_columns") or ()
        if not isinstance(raw_sortable, (list, tuple)):
            return data
        if not all(isinstance(key, str) for key in raw_sortable):
            return data
        sortable = list(dict.fromkeys(raw_sortable))
    else:
        sortable = [c.get("key") for c in columns if c.get("sortable")]

    wanted = set(sortable)
    for column in columns:
        column["sortable"] = column.get("key") in wanted

    normalized = {
        k: v for k, v in data.items() if k not in ("sortableColumns", "sortable_columns")
    }
    normalized["columns"] = columns
    normalized["sortableColumns"] = tuple(sortable)
    return normalized


class Configuration(_FrozenModel):
    """Complete, immutable description of one generation request.

    Normalization happens once, before validation: missing route, module
    and entity names are derived from ``page_name``, every ``Column.sortable``
    flag follows ``sortable_columns`` (or the reverse when ``sortableColumns``
    is not given at all), and :data:`DEFAULT_COLUMNS` stands in when no
    columns are supplied.
    """

    page_name: str = Field(..., min_length=1, description="Human-readable page title")
    route_path: str = Field(..., description="Route below the dashboard group, e.g. 'admin/users'")
    module_name: str = Field(..., description="Module directory / file stem")
    architecture: Architecture = Field(default=Architecture.DDD)
    entity_name: str = Field(..., description="TypeScript entity type name")
    columns: tuple[Column, ...] = Field(default=DEFAULT_COLUMNS)
    filters: tuple[Filter, ...] = Field(default=())
    include_stats: bool = Field(default=True)
    include_row_selection: bool = Field(default=False)
    include_search: Literal[True] = Field(default=True)
    data_fetching: DataFetching = Field(default=DataFetching.MOCK)
    sortable_columns: tuple[str, ...] = Field(default=())
    animations: AnimationConfig = Field(default_factory=AnimationConfig)

    # -- Normalization -------------------------------------------------------

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return _derive_sortable_flags(_fill_name_defaults(data))

    # -- Field checks --------------------------------------------------------

    @field_validator("route_path")
    @classmethod
    def _check_route_path(cls, value: str) -> str:
        return validate_route_path(value)

    @field_validator("module_name")
    @classmethod
    def _check_module_name(cls, value: str) -> str:
        return validate_identifier(value)

    @field_validator("entity_name")
    @classmethod
    def _check_entity_name(cls, value: str) -> str:
        if not _COLUMN_KEY_RE.match(value or ""):
            raise ValueError("Entity name must be a valid TypeScript identifier")
        return value

    # -- Cross-field invariants ----------------------------------------------

    @model_validator(mode="after")
    def _check_keys(self) -> "Configuration":
        column_keys = [c.key for c in self.columns]
        duplicates = sorted({k for k in column_keys if column_keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate column keys: {', '.join(duplicates)}")

        filter_keys = [f.key for f in self.filters]
        duplicates = sorted({k for k in filter_keys if filter_keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate filter keys: {', '.join(duplicates)}")

        unknown = [k for k in self.sortable_columns if k not in column_keys]
        if unknown:
            raise ValueError(f"Sortable columns not present in columns: {', '.join(unknown)}")
        return self

    # -- Convenience ---------------------------------------------------------

    @property
    def has_date_filter(self) -> bool:
        return any(f.type == FilterType.DATE for f in self.filters)

    @property
    def is_tanstack(self) -> bool:
        return self.data_fetching == DataFetching.TANSTACK

    def to_document(self) -> dict[str, Any]:
        """Serialise back to the camelCase document form."""
        return self.model_dump(mode="json", by_alias=True)


def load_configuration(data: dict[str, Any] | Configuration) -> Configuration:
    """Validate a configuration document.

    Raises:
        ConfigurationInvariantViolation: With one entry per failed check.
    """
    if isinstance(data, Configuration):
        return data
    try:
        return Configuration.model_validate(data)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or 'configuration'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise ConfigurationInvariantViolation(
            f"Invalid configuration ({len(errors)} error(s)): " + "; ".join(errors),
            errors=errors,
        ) from exc


# ---------------------------------------------------------------------------
# Pipeline value objects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlannedFile:
    """One output file decided by the planner, before any I/O."""

    role: FileRole
    path: Path
    template: str
    context: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)


@dataclass
class GeneratedFile:
    """A file the writer put on disk."""

    path: Path
    content: str
    action: str = "created"  # "created" | "updated"


@dataclass(frozen=True)
class InstallOutcome:
    """Result of reconciling the required components against the project.

    ``installed``, ``skipped`` and ``failed`` partition ``required`` exactly;
    construction fails otherwise.
    """

    required: tuple[str, ...]
    installed: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        buckets = (set(self.installed), set(self.skipped), set(self.failed))
        total = sum(len(b) for b in buckets)
        union = buckets[0] | buckets[1] | buckets[2]
        if total != len(union) or union != set(self.required):
            raise ValueError(
                "Install outcome does not partition the required components: "
                f"required={list(self.required)} installed={list(self.installed)} "
                f"skipped={list(self.skipped)} failed={list(self.failed)}"
            )

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class GenerationResult:
    """Everything a caller needs after a successful run."""

    files: list[GeneratedFile] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    install: Optional[InstallOutcome] = None

    @property
    def paths(self) -> list[Path]:
        return [f.path for f in self.files]
