"""pagegen generation orchestrator.

Runs one generation request through four stages:

Stage PLAN      -- validate the configuration and plan every output file.
Stage INSTALL   -- reconcile shadcn/ui components (simplified architecture).
Stage WRITE     -- render templates and write the planned files.
Stage SUMMARIZE -- derive the follow-up instructions.

Usage::

    pagegen page.yaml --root ./my-next-app
    python -m pagegen page.json --architecture simplified --skip-install
"""

from __future__ import annotations

import asyncio
import json
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import yaml
from rich.markup import escape

from pagegen.components import ComponentInstaller, resolve_required_components
from pagegen.config import Settings
from pagegen.events import (
    ConsoleEventSink,
    EventKind,
    EventSink,
    GenerationEvent,
    null_sink,
)
from pagegen.models import (
    Architecture,
    Configuration,
    ConfigurationInvariantViolation,
    DataFetching,
    GeneratedFile,
    GenerationResult,
    InstallOutcome,
    PlannedFile,
    clean_route_path,
    load_configuration,
)
from pagegen.scaffolder import (
    FilesystemFailure,
    FileWriter,
    RenderFailure,
    TemplateRenderer,
    WriteConflict,
    plan_files,
)
from pagegen.utils import (
    console,
    print_dim,
    print_error,
    print_step,
    print_success,
    print_summary_table,
    print_title,
    relative_to_root,
)

# ---------------------------------------------------------------------------
# Stages and exceptions
# ---------------------------------------------------------------------------


class Stage(str, Enum):
    PLAN = "plan"
    INSTALL = "install"
    WRITE = "write"
    SUMMARIZE = "summarize"


STAGE_TITLES: dict[Stage, str] = {
    Stage.PLAN: "Planning files",
    Stage.INSTALL: "Checking shadcn/ui components",
    Stage.WRITE: "Writing files",
    Stage.SUMMARIZE: "Summarizing",
}


class GenerationError(Exception):
    """Raised when a stage fails irrecoverably."""

    def __init__(self, stage: Stage, message: str) -> None:
        self.stage = stage
        super().__init__(f"Stage {stage.value}: {message}")


# ---------------------------------------------------------------------------
# Configuration files
# ---------------------------------------------------------------------------


def read_configuration_document(path: str | Path) -> dict[str, Any]:
    """Parse a JSON or YAML configuration file into a plain mapping.

    ``.yaml`` / ``.yml`` files are read with PyYAML, everything else as JSON.

    Raises:
        OSError: If the file cannot be read.
        ConfigurationInvariantViolation: If it does not parse to a mapping.
    """
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() in (".yaml", ".yml"):
            document = yaml.safe_load(text)
        else:
            document = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationInvariantViolation(f"Could not parse {file_path}: {exc}") from exc

    if not isinstance(document, dict):
        raise ConfigurationInvariantViolation(
            f"{file_path} must contain a mapping, got {type(document).__name__}"
        )
    return document


def load_configuration_file(path: str | Path) -> Configuration:
    """Read and validate a configuration file."""
    return load_configuration(read_configuration_document(path))


# ---------------------------------------------------------------------------
# Instructions
# ---------------------------------------------------------------------------


def required_packages(config: Configuration) -> list[str]:
    """npm packages the generated code imports beyond a stock shadcn project."""
    packages: list[str] = []
    if config.data_fetching == DataFetching.TANSTACK:
        packages.append("@tanstack/react-query")
    if config.animations.any_enabled:
        packages.append("framer-motion")
    return packages


def build_instructions(config: Configuration, settings: Settings) -> list[str]:
    """Follow-up steps for the user.  Depends on the configuration only."""
    base_url = settings.dev_server_url.rstrip("/")
    instructions = [f"Navigate to your page: {base_url}/{config.route_path}"]

    packages = required_packages(config)
    if packages:
        instructions.append(f"Install dependencies: npm install {' '.join(packages)}")

    instructions.append("Customize the generated code to fit your needs")

    if config.architecture == Architecture.DDD:
        instructions.append("Connect to your real API (replace mock repository)")
    else:
        instructions.append("Replace mock data with your real API")

    if config.is_tanstack:
        instructions.append("Ensure your app is wrapped in <QueryClientProvider>")
    return instructions


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class GenerationPipeline:
    """Drives one configuration through plan, install, write and summarize.

    Every stage runs at most once per :meth:`run`.  Recovered problems
    (failed component installs, an unusable shadcn setup, files about to be
    overwritten) are reported to the sink as warnings and collected in
    :attr:`GenerationResult.warnings`; anything else aborts the run with a
    :class:`GenerationError`.

    Attributes:
        settings: Project layout and installer settings.
        sink: Receives every progress and warning event.
        renderer: Jinja2 renderer used by the writer.
    """

    def __init__(
        self,
        settings: Settings,
        sink: EventSink = null_sink,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings
        self.sink = sink
        self.renderer = renderer or TemplateRenderer()
        self.installer = ComponentInstaller(settings, self._dispatch)
        self.writer = FileWriter(self.renderer, self._dispatch, root=settings.root)
        self._warnings: list[str] = []

    def _dispatch(self, event: GenerationEvent) -> None:
        if event.is_warning:
            self._warnings.append(event.message)
        self.sink(event)

    def _stage(self, stage: Stage) -> None:
        self._dispatch(GenerationEvent(kind=EventKind.STAGE, message=STAGE_TITLES[stage]))

    async def run(
        self,
        config: Configuration | Mapping[str, Any],
        *,
        skip_install: bool = False,
        dry_run: bool = False,
    ) -> GenerationResult:
        """Generate the page described by *config*.

        Args:
            config: A validated configuration or a camelCase document.
            skip_install: Do not check or install shadcn components.
            dry_run: Plan and render, but write nothing and install nothing.

        Raises:
            ConfigurationInvariantViolation: Before any I/O, for an invalid
                configuration or colliding planned paths.
            GenerationError: When installing, rendering or writing fails.
        """
        self._warnings = []
        if not isinstance(config, Configuration):
            config = load_configuration(dict(config))

        # Stage PLAN
        self._stage(Stage.PLAN)
        planned = plan_files(config, self.settings)
        self._dispatch(
            GenerationEvent(
                kind=EventKind.INFO,
                message=f"Planned {len(planned)} file(s) for {config.architecture.value} architecture",
            )
        )

        # Stage INSTALL
        install: InstallOutcome | None = None
        if config.architecture == Architecture.SIMPLIFIED:
            if skip_install or dry_run:
                self._dispatch(
                    GenerationEvent(kind=EventKind.INFO, message="Skipping component installation")
                )
            else:
                self._stage(Stage.INSTALL)
                install = await self._install(config)

        # Stage WRITE
        self._stage(Stage.WRITE)
        files = await self._write(config, planned, dry_run)

        # Stage SUMMARIZE
        self._stage(Stage.SUMMARIZE)
        instructions = build_instructions(config, self.settings)

        return GenerationResult(
            files=files,
            instructions=instructions,
            warnings=list(self._warnings),
            install=install,
        )

    async def _install(self, config: Configuration) -> InstallOutcome | None:
        required = resolve_required_components(config)
        try:
            return await self.installer.reconcile(required)
        except OSError as exc:
            raise GenerationError(Stage.INSTALL, str(exc)) from exc

    async def _write(
        self,
        config: Configuration,
        planned: list[PlannedFile],
        dry_run: bool,
    ) -> list[GeneratedFile]:
        if config.architecture == Architecture.SIMPLIFIED:
            conflicts = self.writer.find_conflicts(planned)
            if conflicts:
                names = ", ".join(relative_to_root(p, self.settings.root) for p in conflicts)
                self._dispatch(
                    GenerationEvent(
                        kind=EventKind.CONFLICT,
                        message=f"The following files will be overwritten: {names}",
                    )
                )

        try:
            if dry_run:
                return self.writer.render(planned)
            return await self.writer.write(planned, overwrite=True)
        except (FilesystemFailure, WriteConflict) as exc:
            raise GenerationError(Stage.WRITE, str(exc)) from exc
        except RenderFailure as exc:
            raise GenerationError(Stage.WRITE, f"Template rendering failed: {exc}") from exc


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _summary(config: Configuration) -> dict[str, str]:
    animations = config.animations
    enabled = [
        name
        for name, on in (
            ("page transitions", animations.page_transitions),
            ("list", animations.list_animations),
            ("cards", animations.card_animations),
        )
        if on
    ]
    return {
        "Page Name": config.page_name,
        "Route": f"/{config.route_path}",
        "Module": config.module_name,
        "Architecture": config.architecture.value,
        "Entity": config.entity_name,
        "Columns": ", ".join(c.label for c in config.columns),
        "Filters": ", ".join(f.label for f in config.filters) or "none",
        "Sortable": ", ".join(config.sortable_columns) or "none",
        "Stats Cards": "yes" if config.include_stats else "no",
        "Row Selection": "yes" if config.include_row_selection else "no",
        "Data Fetching": config.data_fetching.value,
        "Animations": (
            f"{', '.join(enabled)} ({animations.intensity.value})" if enabled else "none"
        ),
    }


def main() -> None:
    """CLI entry point for ``pagegen``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="pagegen -- generate a Next.js list page from a configuration file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  pagegen users.yaml\n"
            "  pagegen users.json --root ./web --architecture simplified\n"
            "  pagegen users.yaml --dry-run\n"
        ),
    )
    parser.add_argument("config", help="Path to a JSON or YAML page configuration")
    parser.add_argument(
        "--root",
        default=None,
        help="Next.js project root (default: $PAGEGEN_PROJECT_ROOT or the current directory)",
    )
    parser.add_argument(
        "--architecture",
        choices=[a.value for a in Architecture],
        default=None,
        help="Override the architecture from the configuration file",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not check or install shadcn/ui components",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Plan and render files, but write nothing",
    )

    args = parser.parse_args()

    overrides: dict[str, Any] = {}
    if args.root:
        overrides["project_root"] = Path(args.root)
    settings = Settings.from_env(**overrides)

    try:
        document = read_configuration_document(args.config)
        if args.architecture:
            document["architecture"] = args.architecture
        if isinstance(document.get("routePath"), str):
            document["routePath"] = clean_route_path(document["routePath"])
        config = load_configuration(document)
    except OSError as exc:
        print_error(f"Error: cannot read configuration file: {escape(str(exc))}")
        sys.exit(1)
    except ConfigurationInvariantViolation as exc:
        print_error("Error: invalid configuration")
        for error in exc.errors:
            print_dim(f"  - {escape(error)}")
        sys.exit(1)

    print_title("Page Generator")
    print_summary_table(_summary(config), title="Configuration Summary")

    pipeline = GenerationPipeline(settings, ConsoleEventSink())
    try:
        result = asyncio.run(
            pipeline.run(config, skip_install=args.skip_install, dry_run=args.dry_run)
        )
    except (GenerationError, ConfigurationInvariantViolation) as exc:
        print_error(f"Generation failed: {escape(str(exc))}")
        sys.exit(1)

    console.print()
    if args.dry_run:
        print_success(f"Dry run: {len(result.files)} file(s) would be written")
    else:
        print_success(f"Page generated successfully ({len(result.files)} file(s))")
    for generated in result.files:
        print_dim(f"  {generated.action:<8} {relative_to_root(generated.path, settings.root)}")

    console.print()
    console.print("[bold]Next steps:[/bold]")
    for index, instruction in enumerate(result.instructions, start=1):
        print_step(index, len(result.instructions), instruction)


if __name__ == "__main__":
    main()
