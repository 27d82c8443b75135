"""ECS capacity providers backed by Auto Scaling groups."""

import pulumi
import pulumi_aws

from ecs_components.compute._component import child_opts, new_component
from ecs_components.config import AutoscalingGroupProviderConfig, CapacityProviderConfig


def _auto_scaling_group_provider(
    asg: AutoscalingGroupProviderConfig,
) -> pulumi_aws.ecs.CapacityProviderAutoScalingGroupProviderArgs:
    managed_scaling = None
    if asg.managed_scaling is not None:
        managed_scaling = pulumi_aws.ecs.CapacityProviderAutoScalingGroupProviderManagedScalingArgs(
            instance_warmup_period=asg.managed_scaling.instance_warmup_period,
            maximum_scaling_step_size=asg.managed_scaling.maximum_scaling_step_size,
            minimum_scaling_step_size=asg.managed_scaling.minimum_scaling_step_size,
            status=asg.managed_scaling.status,
            target_capacity=asg.managed_scaling.target_capacity,
        )
    return pulumi_aws.ecs.CapacityProviderAutoScalingGroupProviderArgs(
        auto_scaling_group_arn=asg.autoscaling_group_arn,
        managed_draining=asg.managed_draining,
        managed_scaling=managed_scaling,
        managed_termination_protection=asg.managed_termination_protection,
    )


def create_capacity_providers(
    providers: list[CapacityProviderConfig],
    opts: pulumi.ResourceOptions | None = None,
) -> list[pulumi_aws.ecs.CapacityProvider]:
    """Create ECS capacity providers, one component per provider."""
    created: list[pulumi_aws.ecs.CapacityProvider] = []
    for provider in providers:
        component = new_component("CapacityProvider", provider.name, opts)
        pulumi.log.debug(f"Creating ECS capacity provider '{provider.name}'")
        try:
            resource = pulumi_aws.ecs.CapacityProvider(
                provider.name,
                name=provider.name,
                auto_scaling_group_provider=_auto_scaling_group_provider(
                    provider.autoscaling_group_provider
                ),
                tags=provider.tags,
                opts=child_opts(component),
            )
        except Exception as e:
            raise RuntimeError(f"failed to create new capacity provider: {e}") from e
        component.register_outputs({"arn": resource.arn})
        created.append(resource)
    return created
