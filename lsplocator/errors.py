"""Domain exceptions for binary discovery and CLI diagnostics."""

from __future__ import annotations


class LocatorError(RuntimeError):
    """Base class for discovery failures raised below the locator layer."""


class ManifestNotFoundError(LocatorError):
    """Raised when no `package.json` exists in any ancestor directory."""

    def __init__(self, start_dir: str, binary_name: str) -> None:
        super().__init__(f"Could not find package.json for `{binary_name}` above `{start_dir}`.")
        self.start_dir = start_dir
        self.binary_name = binary_name


class BinEntryNotFoundError(LocatorError):
    """Raised when the nearest `package.json` declares no bin entry for a name."""

    def __init__(self, manifest_path: str, binary_name: str) -> None:
        super().__init__(f"No bin entry for `{binary_name}` found in `{manifest_path}`.")
        self.manifest_path = manifest_path
        self.binary_name = binary_name


class PackageNotFoundError(LocatorError):
    """Raised when a package cannot be resolved from any search root."""

    def __init__(self, package_name: str, search_roots: tuple[str, ...]) -> None:
        roots = ", ".join(search_roots) if search_roots else "(none)"
        super().__init__(f"Cannot find package `{package_name}` from search roots: {roots}.")
        self.package_name = package_name
        self.search_roots = search_roots


class CommandStageError(RuntimeError):
    """Raised when a specific CLI command stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped command error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
