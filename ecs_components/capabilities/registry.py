"""Section registry: phase ordering and handler registration."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol

from ecs_components.capabilities.context import ProvisionContext


class Phase(IntEnum):
    """Execution phase order for config sections (lower runs first)."""

    FOUNDATION = 0
    CLUSTER = 1
    CAPACITY = 2
    TASK = 3
    SERVICE = 4
    DEPLOYMENT = 5


class SectionHandler(Protocol):
    """Protocol for section handler functions."""

    def __call__(self, section_config: Any, ctx: ProvisionContext) -> None:
        ...


@dataclass
class SectionDef:
    """Registered section: handler and phase."""

    handler: Callable[[Any, ProvisionContext], None]
    phase: Phase


SECTIONS: dict[str, SectionDef] = {}


def register(name: str, phase: Phase) -> Callable[[SectionHandler], SectionHandler]:
    """Decorator to register a section handler in SECTIONS."""

    def decorator(fn: SectionHandler) -> SectionHandler:
        SECTIONS[name] = SectionDef(handler=fn, phase=phase)
        return fn

    return decorator
