"""Top-level package for lsplocator.

This package locates language-server executables (project dependencies,
global package-manager installs, or a user-configured path) and builds
cross-platform launch descriptors for them. The main entry points are
`BinaryFinder` and `LaunchDescriptorBuilder`.
"""

from loguru import logger as _logger

from .finder import BinaryFinder
from .launch.descriptor import LaunchDescriptorBuilder
from .launch.runtime import RuntimeResolver
from .workspace import Workspace

_logger.disable(__name__)

__all__ = [
    "BinaryFinder",
    "LaunchDescriptorBuilder",
    "RuntimeResolver",
    "Workspace",
    "__version__",
]

__version__ = "0.1.0"
