"""Component resource scoping shared by the ECS constructors."""

import pulumi

COMPONENT_PREFIX = "ecs-components:ecs"


def new_component(
    kind: str,
    name: str,
    opts: pulumi.ResourceOptions | None = None,
) -> pulumi.ComponentResource:
    """Register the component that parents every provider resource of one configured item."""
    return pulumi.ComponentResource(f"{COMPONENT_PREFIX}:{kind}", name, None, opts)


def child_opts(component: pulumi.ComponentResource) -> pulumi.ResourceOptions:
    """Options for a provider resource created under the component."""
    return pulumi.ResourceOptions(parent=component)
