"""Unit tests for global package-manager binary discovery."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Sequence

from lsplocator.discovery.global_modules import GlobalBinaryLocator, global_node_modules_paths
from lsplocator.process import SpawnResult
from tests.fixture_packages import install_package, write_bin_shim


def _spawn_with_roots(roots: dict[str, SpawnResult]):
    """Build a fake spawn function answering `<manager> root -g` queries."""

    calls: list[tuple[str, tuple[str, ...], bool]] = []

    def _spawn(
        command: str,
        args: Sequence[str],
        *,
        shell: bool = False,
        timeout_ms: int | None = None,
        encoding: str = "utf-8",
    ) -> SpawnResult:
        calls.append((command, tuple(args), shell))
        return roots.get(command, SpawnResult(status=127, stderr="not found"))

    return _spawn, calls


def test_global_paths_keep_order_and_drop_unavailable_managers(tmp_path: Path) -> None:
    """Failed or blank manager queries should be dropped; bun is always appended."""

    spawn, calls = _spawn_with_roots(
        {
            "npm": SpawnResult(status=1, stdout="/ignored\n"),
            "pnpm": SpawnResult(status=0, stdout="  /pnpm/global/node_modules \n"),
        }
    )

    roots = global_node_modules_paths(spawn=spawn, home=lambda: tmp_path)

    assert roots == [
        "/pnpm/global/node_modules",
        str(tmp_path / ".bun" / "install" / "global" / "node_modules"),
    ]
    assert calls == [("npm", ("root", "-g"), True), ("pnpm", ("root", "-g"), True)]


def test_global_paths_treat_blank_output_and_spawn_errors_as_absent(tmp_path: Path) -> None:
    """Blank stdout and spawn errors should both mean "no root"."""

    spawn, _ = _spawn_with_roots(
        {
            "npm": SpawnResult(status=0, stdout="   \n"),
            "pnpm": SpawnResult(status=None, error=FileNotFoundError("pnpm")),
        }
    )

    roots = global_node_modules_paths(spawn=spawn, home=lambda: tmp_path)

    assert roots == [str(tmp_path / ".bun" / "install" / "global" / "node_modules")]


def test_global_locator_resolves_bin_entry_from_npm_root(tmp_path: Path) -> None:
    """A package under the npm global root should resolve to its bin entry."""

    npm_root = tmp_path / "npm" / "lib" / "node_modules"
    package_dir = install_package(npm_root, "oxlint", {"oxlint": "bin/oxlint"})
    spawn, _ = _spawn_with_roots({"npm": SpawnResult(status=0, stdout=f"{npm_root}\n")})
    locator = GlobalBinaryLocator(spawn=spawn, home=lambda: tmp_path / "home", platform="linux")

    result = asyncio.run(locator.locate("oxlint"))

    assert result == str(package_dir / "bin" / "oxlint")


def test_global_locator_probes_bun_bin_directory(tmp_path: Path) -> None:
    """Without a resolvable package, the `.bin` shim under a global root should be used."""

    bun_root = tmp_path / ".bun" / "install" / "global" / "node_modules"
    shim = write_bin_shim(bun_root, "oxlint")
    spawn, _ = _spawn_with_roots({})
    locator = GlobalBinaryLocator(spawn=spawn, home=lambda: tmp_path, platform="linux")

    assert asyncio.run(locator.locate("oxlint")) == str(shim)


def test_global_locator_returns_none_for_unknown_binary(tmp_path: Path) -> None:
    """Unknown tools should be absent even when every manager is unavailable."""

    spawn, _ = _spawn_with_roots({})
    locator = GlobalBinaryLocator(spawn=spawn, home=lambda: tmp_path, platform="linux")

    assert asyncio.run(locator.locate("non-existent-binary-package-name-12345")) is None


def test_global_locator_absorbs_root_discovery_errors(tmp_path: Path) -> None:
    """A spawn function that raises should make the locator report absent."""

    def _raising_spawn(*args: object, **kwargs: object) -> SpawnResult:
        raise RuntimeError("spawn exploded")

    locator = GlobalBinaryLocator(spawn=_raising_spawn, home=lambda: tmp_path, platform="linux")

    assert asyncio.run(locator.locate("oxlint")) is None


def _homeless() -> Path:
    raise RuntimeError("Could not determine home directory.")


def test_global_paths_keep_manager_roots_when_home_is_unresolvable() -> None:
    """An unresolvable home directory should drop only the bun root."""

    spawn, _ = _spawn_with_roots(
        {
            "npm": SpawnResult(status=0, stdout="/npm/lib/node_modules\n"),
            "pnpm": SpawnResult(status=0, stdout="/pnpm/global/node_modules\n"),
        }
    )

    roots = global_node_modules_paths(spawn=spawn, home=_homeless)

    assert roots == ["/npm/lib/node_modules", "/pnpm/global/node_modules"]


def test_global_locator_finds_npm_package_without_home_directory(tmp_path: Path) -> None:
    """npm-installed tools should still resolve when `home()` raises."""

    npm_root = tmp_path / "npm" / "lib" / "node_modules"
    package_dir = install_package(npm_root, "oxlint", {"oxlint": "bin/oxlint"})
    spawn, _ = _spawn_with_roots({"npm": SpawnResult(status=0, stdout=f"{npm_root}\n")})
    locator = GlobalBinaryLocator(spawn=spawn, home=_homeless, platform="linux")

    assert asyncio.run(locator.locate("oxlint")) == str(package_dir / "bin" / "oxlint")
