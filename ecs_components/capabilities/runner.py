"""Run declared config sections in phase order."""

from typing import Any

import pulumi

from ecs_components.capabilities.context import ProvisionContext
from ecs_components.capabilities.registry import SECTIONS


def run_capabilities(ctx: ProvisionContext) -> dict[str, Any]:
    """Run the handler of every declared section, lowest phase first.

    Resources of a finished phase become dependencies of every later phase.
    Returns the exports collected by the handlers.
    """
    declared = ctx.config.sections
    missing = [name for name in declared if name not in SECTIONS]
    if missing:
        raise RuntimeError(f"no handler registered for sections: {', '.join(missing)}")

    current_phase = None
    for name in sorted(declared, key=lambda n: SECTIONS[n].phase):
        definition = SECTIONS[name]
        if current_phase is not None and definition.phase != current_phase:
            ctx.finish_phase()
        current_phase = definition.phase
        pulumi.log.info(f"Provisioning section '{name}'")
        definition.handler(declared[name], ctx)
    ctx.finish_phase()
    return ctx.exports
