"""ECS task sets for services using the EXTERNAL deployment controller."""

from dataclasses import dataclass
from typing import Any

import pulumi
import pulumi_aws

from ecs_components.compute._component import child_opts, new_component
from ecs_components.config import TaskSetConfig


@dataclass
class TaskSetOutputs:
    """Outputs from task set creation."""

    arn: pulumi.Output[str]
    task_set_id: pulumi.Output[str]
    task_set: pulumi_aws.ecs.TaskSet


def _task_set_args(task_set: TaskSetConfig) -> dict[str, Any]:
    capacity_provider_strategies = [
        pulumi_aws.ecs.TaskSetCapacityProviderStrategyArgs(
            capacity_provider=s.capacity_provider,
            weight=s.weight,
            base=s.base,
        )
        for s in task_set.capacity_provider_strategies
    ]
    load_balancers = [
        pulumi_aws.ecs.TaskSetLoadBalancerArgs(
            container_name=lb.container_name,
            container_port=lb.container_port,
            load_balancer_name=lb.load_balancer_name,
            target_group_arn=lb.target_group_arn,
        )
        for lb in task_set.load_balancers
    ]
    args: dict[str, Any] = {
        "cluster": task_set.cluster,
        "service": task_set.service,
        "task_definition": task_set.task_definition,
        "capacity_provider_strategies": capacity_provider_strategies or None,
        "external_id": task_set.external_id,
        "force_delete": task_set.force_delete,
        "launch_type": task_set.launch_type,
        "load_balancers": load_balancers or None,
        "platform_version": task_set.platform_version,
        "tags": task_set.tags,
        "wait_until_stable": task_set.wait_until_stable,
        "wait_until_stable_timeout": task_set.wait_until_stable_timeout,
    }
    if task_set.network_configuration is not None:
        args["network_configuration"] = pulumi_aws.ecs.TaskSetNetworkConfigurationArgs(
            subnets=task_set.network_configuration.subnets,
            assign_public_ip=task_set.network_configuration.assign_public_ip,
            security_groups=task_set.network_configuration.security_groups or None,
        )
    if task_set.scale is not None:
        args["scale"] = pulumi_aws.ecs.TaskSetScaleArgs(
            unit=task_set.scale.unit,
            value=task_set.scale.value,
        )
    if task_set.service_registries is not None:
        args["service_registries"] = pulumi_aws.ecs.TaskSetServiceRegistriesArgs(
            registry_arn=task_set.service_registries.registry_arn,
            container_name=task_set.service_registries.container_name,
            container_port=task_set.service_registries.container_port,
            port=task_set.service_registries.port,
        )
    return args


def create_task_sets(
    task_sets: list[TaskSetConfig],
    opts: pulumi.ResourceOptions | None = None,
) -> list[TaskSetOutputs]:
    """Create ECS task sets, one component per task set."""
    outputs: list[TaskSetOutputs] = []
    for task_set in task_sets:
        component = new_component("TaskSet", task_set.name, opts)
        pulumi.log.debug(f"Creating ECS task set '{task_set.name}'")
        try:
            resource = pulumi_aws.ecs.TaskSet(
                task_set.name,
                opts=child_opts(component),
                **_task_set_args(task_set),
            )
        except Exception as e:
            raise RuntimeError(f"failed to create new task set: {e}") from e
        component.register_outputs({"arn": resource.arn})
        outputs.append(
            TaskSetOutputs(arn=resource.arn, task_set_id=resource.task_set_id, task_set=resource)
        )
    return outputs
