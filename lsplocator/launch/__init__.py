"""Launch descriptor construction and runtime resolution."""

from .descriptor import LaunchDescriptorBuilder, build_launch_descriptor
from .runtime import RuntimeResolver, resolve_runtime_path

__all__ = [
    "LaunchDescriptorBuilder",
    "RuntimeResolver",
    "build_launch_descriptor",
    "resolve_runtime_path",
]
