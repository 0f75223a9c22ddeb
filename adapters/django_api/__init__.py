"""
TentDesk Django HTTP adapter.
Thin framework glue over the tentdesk core.
"""

from adapters.django_api.wiring import (
    DeskDependencies,
    build_dependencies,
    create_dependencies,
    install_dependencies,
    reset_dependencies,
)

__all__ = [
    "DeskDependencies",
    "build_dependencies",
    "create_dependencies",
    "install_dependencies",
    "reset_dependencies",
]
