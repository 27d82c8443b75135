"""Section handlers: each provisions one top-level section of the ECS config."""

import ecs_components.capabilities.ecs  # noqa: F401  (registers handlers)
from ecs_components.capabilities.context import ProvisionContext
from ecs_components.capabilities.runner import run_capabilities

__all__ = ["ProvisionContext", "run_capabilities"]
