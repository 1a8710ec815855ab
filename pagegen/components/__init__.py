"""shadcn/ui component resolution and installation.

Key objects:
    resolve_required_components - Configuration -> required component ids
    ComponentInstaller          - presence checks and ``shadcn add`` runs
    PreconditionUnmet           - project not initialised / CLI unreachable
"""

from pagegen.components.installer import ComponentInstallAttempt, ComponentInstaller, PreconditionUnmet
from pagegen.components.resolver import BASELINE_COMPONENTS, COMPONENT_MAP, resolve_required_components

__all__ = [
    # Resolution
    "resolve_required_components",
    "BASELINE_COMPONENTS",
    "COMPONENT_MAP",
    # Installation
    "ComponentInstaller",
    "ComponentInstallAttempt",
    "PreconditionUnmet",
]
