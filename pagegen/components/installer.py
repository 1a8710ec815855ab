"""shadcn/ui component installation.

Checks which required components already exist in the host project and runs
``npx shadcn@latest add <component>`` for each missing one.  Installation is
best-effort: a failed install is recorded and the remaining components are
still processed.  When the project is not shadcn-initialised or the CLI is
unreachable, the whole stage is skipped with a warning.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path

from pagegen.config import Settings
from pagegen.events import EventKind, EventSink, GenerationEvent, null_sink
from pagegen.models import InstallOutcome
from pagegen.utils import run_command


class PreconditionUnmet(Exception):
    """Raised when component installation cannot be attempted at all."""

    def __init__(self, message: str, hint: str = "") -> None:
        self.hint = hint
        super().__init__(message)


@dataclass
class ComponentInstallAttempt:
    """Outcome of one ``shadcn add`` invocation."""

    component: str
    success: bool
    exit_code: int = -1
    error: str = ""
    duration_seconds: float = 0.0


class ComponentInstaller:
    """Reconciles required shadcn components against a host project.

    Components are processed strictly one after another so progress events
    appear in the same order as the required set.
    """

    def __init__(self, settings: Settings, sink: EventSink = null_sink) -> None:
        self.settings = settings
        self.sink = sink

    # -- Presence checks ---------------------------------------------------

    def is_initialized(self) -> bool:
        """Return ``True`` if the project has a ``components.json`` marker."""
        return self.settings.marker_path.is_file()

    def component_path(self, component: str) -> Path:
        return self.settings.ui_components_path / f"{component}.tsx"

    def is_installed(self, component: str) -> bool:
        """Return ``True`` if ``components/ui/<component>.tsx`` exists."""
        return self.component_path(component).is_file()

    async def is_cli_available(self) -> bool:
        """Probe the shadcn CLI.  Any failure to run it counts as unavailable."""
        cmd = self.settings.installer.probe_command()
        try:
            returncode, _, _ = await run_command(
                cmd,
                cwd=self.settings.root,
                timeout=self.settings.installer.probe_timeout,
            )
        except (FileNotFoundError, PermissionError):
            return False
        return returncode == 0

    async def check_preconditions(self) -> None:
        """Raise :class:`PreconditionUnmet` unless installation can proceed."""
        if not self.is_initialized():
            raise PreconditionUnmet(
                "shadcn/ui is not initialized in this project.",
                hint=f"Please run: {self.settings.installer.npx_binary} "
                f"{self.settings.installer.package} init",
            )
        if not await self.is_cli_available():
            raise PreconditionUnmet(
                "shadcn CLI not available. Skipping component auto-install."
            )

    # -- Installation ------------------------------------------------------

    async def install_one(self, component: str) -> ComponentInstallAttempt:
        """Run the installer for a single component.

        Never raises for an install failure; the exit status is the only
        success signal and stdout/stderr are not interpreted.
        """
        cmd = self.settings.installer.install_command(component)
        start = time.monotonic()
        try:
            returncode, _, stderr = await run_command(
                cmd,
                cwd=self.settings.root,
                timeout=self.settings.installer.install_timeout,
            )
        except (FileNotFoundError, PermissionError) as exc:
            return ComponentInstallAttempt(
                component=component,
                success=False,
                error=f"Could not execute '{cmd[0]}': {exc}",
                duration_seconds=time.monotonic() - start,
            )

        elapsed = time.monotonic() - start
        if returncode != 0:
            return ComponentInstallAttempt(
                component=component,
                success=False,
                exit_code=returncode,
                error=stderr.splitlines()[-1] if stderr else f"exit code {returncode}",
                duration_seconds=elapsed,
            )
        return ComponentInstallAttempt(
            component=component,
            success=True,
            exit_code=0,
            duration_seconds=elapsed,
        )

    async def install(self, required: tuple[str, ...]) -> InstallOutcome:
        """Install every missing component in *required*.

        Returns:
            An :class:`InstallOutcome` whose three buckets partition *required*.
        """
        installed: list[str] = []
        skipped: list[str] = []
        failed: list[str] = []

        self._emit(EventKind.INFO, f"Checking {len(required)} shadcn components...")

        for component in required:
            if self.is_installed(component):
                skipped.append(component)
                self._emit(
                    EventKind.COMPONENT_PRESENT,
                    f"{component} already installed",
                    component=component,
                )
                continue

            self._emit(
                EventKind.COMPONENT_INSTALLING,
                f"{component} missing, installing...",
                component=component,
            )
            attempt = await self.install_one(component)
            if attempt.success:
                installed.append(component)
                self._emit(
                    EventKind.COMPONENT_INSTALLED,
                    f"Installed {component}",
                    component=component,
                )
            else:
                failed.append(component)
                self._emit(
                    EventKind.COMPONENT_FAILED,
                    f"Failed to install {component}: {attempt.error}",
                    component=component,
                )

        return InstallOutcome(
            required=tuple(required),
            installed=tuple(installed),
            skipped=tuple(skipped),
            failed=tuple(failed),
        )

    async def reconcile(self, required: tuple[str, ...]) -> InstallOutcome | None:
        """Check preconditions, then install.

        Returns ``None`` (after emitting a warning) when the stage is skipped.
        """
        try:
            await self.check_preconditions()
        except PreconditionUnmet as exc:
            message = f"{exc} {exc.hint}".strip()
            self._emit(EventKind.PRECONDITION_UNMET, message)
            return None

        outcome = await self.install(required)

        if outcome.installed:
            self._emit(
                EventKind.INFO,
                f"Installed {len(outcome.installed)} component(s): {', '.join(outcome.installed)}",
            )
        return outcome

    def _emit(self, kind: EventKind, message: str, component: str | None = None) -> None:
        self.sink(GenerationEvent(kind=kind, message=message, component=component))
