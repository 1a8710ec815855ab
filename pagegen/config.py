"""pagegen tool settings.

Centralised, typed settings for where generated files land inside the host
project and how the external shadcn installer is invoked.  All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.

These settings describe the *tool*; the page being generated is described by
:class:`pagegen.models.Configuration`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class InstallerConfig(BaseModel):
    """How the shadcn CLI is located and invoked."""

    npx_binary: str = Field(default="npx", description="Launcher used to run the shadcn CLI")
    package: str = Field(default="shadcn@latest", description="Package spec passed to npx")
    install_timeout: int = Field(
        default=300, ge=10, description="Per-component install timeout in seconds"
    )
    probe_timeout: int = Field(
        default=60, ge=5, description="Timeout for the CLI availability probe in seconds"
    )

    def probe_command(self) -> list[str]:
        """Command that succeeds iff the shadcn CLI is reachable."""
        return [self.npx_binary, self.package, "--version"]

    def install_command(self, component: str) -> list[str]:
        """Command that adds one component to the current project."""
        return [self.npx_binary, self.package, "add", component, "--yes", "--overwrite"]


class Settings(BaseModel):
    """Global pagegen settings.

    Holds the host project root and the directory conventions the planner and
    the installer rely on.  Instances are typically created once by the CLI
    entry point and then passed to :class:`pagegen.pipeline.GenerationPipeline`.
    """

    project_root: Path = Field(default_factory=Path.cwd)
    app_dir: str = Field(default="app")
    route_group: str = Field(default="(dashboard)")
    modules_dir: str = Field(default="modules")
    components_dir: str = Field(default="components")
    ui_components_dir: str = Field(default="components/ui")
    marker_file: str = Field(default="components.json")
    dev_server_url: str = Field(default="http://localhost:3000")
    installer: InstallerConfig = Field(default_factory=InstallerConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def root(self) -> Path:
        """Absolute host project root."""
        return self.project_root.resolve()

    @property
    def routes_path(self) -> Path:
        """Directory that holds the route group pages."""
        return self.root / self.app_dir / self.route_group

    @property
    def modules_path(self) -> Path:
        """Root of the DDD module directories."""
        return self.root / self.modules_dir

    @property
    def components_path(self) -> Path:
        """Root of the simplified component directories."""
        return self.root / self.components_dir

    @property
    def ui_components_path(self) -> Path:
        """Directory where installed shadcn components live."""
        return self.root / self.ui_components_dir

    @property
    def marker_path(self) -> Path:
        """File whose presence marks the project as shadcn-initialised."""
        return self.root / self.marker_file

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file.

        Returns:
            The path where the file was written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, **overrides: Any) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            PAGEGEN_PROJECT_ROOT, PAGEGEN_ROUTE_GROUP, PAGEGEN_DEV_SERVER_URL,
            PAGEGEN_NPX_BINARY, PAGEGEN_SHADCN_PACKAGE,
            PAGEGEN_INSTALL_TIMEOUT, PAGEGEN_PROBE_TIMEOUT.

        Keyword *overrides* win over the environment.
        """
        installer_kwargs: dict[str, Any] = {}
        if os.environ.get("PAGEGEN_NPX_BINARY"):
            installer_kwargs["npx_binary"] = os.environ["PAGEGEN_NPX_BINARY"]
        if os.environ.get("PAGEGEN_SHADCN_PACKAGE"):
            installer_kwargs["package"] = os.environ["PAGEGEN_SHADCN_PACKAGE"]
        if os.environ.get("PAGEGEN_INSTALL_TIMEOUT"):
            installer_kwargs["install_timeout"] = int(os.environ["PAGEGEN_INSTALL_TIMEOUT"])
        if os.environ.get("PAGEGEN_PROBE_TIMEOUT"):
            installer_kwargs["probe_timeout"] = int(os.environ["PAGEGEN_PROBE_TIMEOUT"])

        kwargs: dict[str, Any] = {"installer": InstallerConfig(**installer_kwargs)}
        if os.environ.get("PAGEGEN_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["PAGEGEN_PROJECT_ROOT"])
        if os.environ.get("PAGEGEN_ROUTE_GROUP"):
            kwargs["route_group"] = os.environ["PAGEGEN_ROUTE_GROUP"]
        if os.environ.get("PAGEGEN_DEV_SERVER_URL"):
            kwargs["dev_server_url"] = os.environ["PAGEGEN_DEV_SERVER_URL"]

        kwargs.update(overrides)
        return cls(**kwargs)
