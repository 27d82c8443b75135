"""Capacity provider association for an ECS cluster."""

import pulumi
import pulumi_aws

from ecs_components.compute._component import child_opts, new_component
from ecs_components.config import ClusterCapacityProviderConfig


def create_cluster_capacity_providers(
    config: ClusterCapacityProviderConfig,
    opts: pulumi.ResourceOptions | None = None,
) -> pulumi_aws.ecs.ClusterCapacityProviders:
    """Attach capacity providers and a default strategy to an existing cluster.

    The component is named after the cluster, so cluster_name must be a plain
    string here; callers holding an Output resolve the name first.
    """
    if not isinstance(config.cluster_name, str):
        raise ValueError("cluster_name must be a string to name the component")
    component = new_component("ClusterCapacityProviders", config.cluster_name, opts)

    strategies = [
        pulumi_aws.ecs.ClusterCapacityProvidersDefaultCapacityProviderStrategyArgs(
            capacity_provider=s.capacity_provider,
            base=s.base,
            weight=s.weight,
        )
        for s in config.default_capacity_provider_strategies
    ]

    pulumi.log.debug(f"Attaching capacity providers to ECS cluster '{config.cluster_name}'")
    try:
        resource = pulumi_aws.ecs.ClusterCapacityProviders(
            config.cluster_name,
            cluster_name=config.cluster_name,
            capacity_providers=config.capacity_providers or None,
            default_capacity_provider_strategies=strategies or None,
            opts=child_opts(component),
        )
    except Exception as e:
        raise RuntimeError(f"failed to create new cluster capacity provider: {e}") from e

    component.register_outputs({"id": resource.id})
    return resource
