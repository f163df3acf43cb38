"""Factory helpers for building dependencies against an in-memory form."""
from .build_dependency import create_dependencies, create_dependency

__all__ = [
    "create_dependency",
    "create_dependencies",
]
