"""Unit tests for utility functions (pagegen.utils).

Tests cover:
- run_command (success, failure, timeout, cwd, env vars, missing binary)
- Naming helpers (pascal/camel/kebab/snake case, capitalize, pluralize)
- ensure_dir / relative_to_root
- Rich output helpers
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from pagegen.utils import (
    capitalize,
    ensure_dir,
    pluralize,
    print_error,
    print_step,
    print_success,
    print_summary_table,
    print_title,
    print_warning,
    relative_to_root,
    run_command,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command([sys.executable, "-c", "print('hello')"])
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "boom"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_env(self):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['PAGEGEN_TEST'])"],
            env={"PAGEGEN_TEST": "42"},
        )
        assert returncode == 0
        assert stdout == "42"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_returns_minus_one(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_binary_raises(self):
        with pytest.raises(FileNotFoundError):
            await run_command(["pagegen-no-such-binary-xyz"])


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------


class TestNaming:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("user management", "UserManagement"),
            ("support-tickets", "SupportTickets"),
            ("createdAt", "CreatedAt"),
            ("ticket", "Ticket"),
        ],
    )
    def test_pascal_case(self, value: str, expected: str):
        assert to_pascal_case(value) == expected

    @pytest.mark.unit
    def test_camel_case(self):
        assert to_camel_case("Support Tickets") == "supportTickets"
        assert to_camel_case("Ticket") == "ticket"

    @pytest.mark.unit
    def test_kebab_case(self):
        assert to_kebab_case("User Management") == "user-management"
        assert to_kebab_case("  2FA (TOTP)  ") == "2fa-totp"

    @pytest.mark.unit
    def test_snake_case(self):
        assert to_snake_case("SupportTickets") == "support_tickets"
        assert to_snake_case("created at") == "created_at"
        assert to_snake_case("Users") == "users"

    @pytest.mark.unit
    def test_capitalize(self):
        assert capitalize("ticket") == "Ticket"
        assert capitalize("") == ""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "word, expected",
        [
            ("User", "Users"),
            ("Category", "Categories"),
            ("Day", "Days"),
            ("Box", "Boxes"),
            ("Status", "Statuses"),
            ("Match", "Matches"),
        ],
    )
    def test_pluralize(self, word: str, expected: str):
        assert pluralize(word) == expected


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestFileSystem:
    @pytest.mark.unit
    def test_ensure_dir_creates_nested(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"
        result = ensure_dir(target)
        assert result == target
        assert target.is_dir()

    @pytest.mark.unit
    def test_ensure_dir_is_idempotent(self, tmp_path: Path):
        ensure_dir(tmp_path / "x")
        ensure_dir(tmp_path / "x")
        assert (tmp_path / "x").is_dir()

    @pytest.mark.unit
    def test_relative_to_root(self, tmp_path: Path):
        assert relative_to_root(tmp_path / "app" / "page.tsx", tmp_path) == str(
            Path("app") / "page.tsx"
        )
        assert relative_to_root(Path("/elsewhere/x"), tmp_path) == str(Path("/elsewhere/x"))


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestPrintHelpers:
    @pytest.mark.unit
    def test_helpers_do_not_raise(self):
        print_title("Page Generator")
        print_summary_table({"Page Name": "Users", "Route": "/admin/users"})
        print_success("done")
        print_warning("careful")
        print_error("failed")
        print_step(1, 3, "Navigate to your page")
