"""Binary discovery components.

This package locates a tool in the project dependency tree, in global
package-manager roots, or at a user-configured path.
"""

from .global_modules import GlobalBinaryLocator
from .index import WorkspaceManifestIndex, clear_cache, get_dependency_dirs
from .manifest import resolve_bin_from_manifest
from .probe import BinCandidateProbe
from .project import ProjectBinaryLocator
from .settings import UserConfiguredBinaryLocator

__all__ = [
    "BinCandidateProbe",
    "GlobalBinaryLocator",
    "ProjectBinaryLocator",
    "UserConfiguredBinaryLocator",
    "WorkspaceManifestIndex",
    "clear_cache",
    "get_dependency_dirs",
    "resolve_bin_from_manifest",
]
