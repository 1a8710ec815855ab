"""Shared utility functions for pagegen.

Provides async command execution, naming transforms used by the planner and
the Jinja2 filters, and Rich-based console helpers used by the CLI and the
console event sink.
"""

from __future__ import annotations

import asyncio
import os
import re
from pathlib import Path

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace").strip()


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float = 120,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run *cmd* without a shell and collect its output.

    Returns:
        ``(returncode, stdout, stderr)`` with both streams decoded and
        stripped.  When *timeout* seconds pass, the child is killed and
        ``-1`` is returned with the reason in stderr.

    Raises:
        FileNotFoundError: If the program does not exist.
        PermissionError: If the program is not executable.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
        env={**os.environ, **env} if env else None,
    )
    try:
        out, err = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return -1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}"
    return process.returncode or 0, _decode(out), _decode(err)


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------


def to_pascal_case(value: str) -> str:
    """Convert arbitrary text to ``PascalCase``.

    Examples::

        to_pascal_case("user management") -> "UserManagement"
        to_pascal_case("support-tickets") -> "SupportTickets"
        to_pascal_case("createdAt")       -> "CreatedAt"
    """
    parts = re.split(r"[^a-zA-Z0-9]+", value.strip())
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def to_camel_case(value: str) -> str:
    """Convert arbitrary text to ``camelCase``."""
    pascal = to_pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(value: str) -> str:
    """Convert arbitrary text to ``kebab-case``.

    Examples::

        to_kebab_case("User Management") -> "user-management"
        to_kebab_case("  2FA (TOTP)  ")  -> "2fa-totp"
    """
    result = re.sub(r"[^a-z0-9]+", "-", value.lower())
    return result.strip("-")


def to_snake_case(value: str) -> str:
    """Convert arbitrary text to ``snake_case``.

    Examples::

        to_snake_case("SupportTickets") -> "support_tickets"
        to_snake_case("created at")     -> "created_at"
    """
    split = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", value)
    result = re.sub(r"[^a-z0-9]+", "_", split.lower())
    return result.strip("_")


def capitalize(value: str) -> str:
    """Upper-case the first character only."""
    return value[:1].upper() + value[1:]


def pluralize(word: str) -> str:
    """Pluralize an English word with simple suffix rules.

    Examples::

        pluralize("User")     -> "Users"
        pluralize("Category") -> "Categories"
        pluralize("Box")      -> "Boxes"
    """
    if word.endswith("y") and not word.endswith(("ay", "ey", "iy", "oy", "uy")):
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The ``Path`` object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def relative_to_root(path: Path, root: Path) -> str:
    """Return *path* relative to *root* when possible, else the full path."""
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_title(message: str) -> None:
    """Print a bold section rule."""
    console.print()
    console.print(Rule(f"[bold bright_cyan]{message}[/bold bright_cyan]", style="bright_cyan"))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a blue informational message."""
    console.print(f"[blue]{message}[/blue]")


def print_dim(message: str) -> None:
    """Print a dimmed detail line."""
    console.print(f"[dim]{message}[/dim]")


def print_step(step: int, total: int, message: str) -> None:
    """Print a numbered ``[step/total]`` line."""
    console.print(f"[grey50][{step}/{total}][/grey50] {message}")
