"""ECS section handlers: one per top-level config section.

Handlers read their typed config from ctx.config. References to resources
provisioned by an earlier phase may be omitted from the config; they are
filled from the context.
"""

import dataclasses
from typing import Any

from ecs_components.capabilities.context import ProvisionContext
from ecs_components.capabilities.registry import Phase, register
from ecs_components.compute.account_settings import create_account_settings_default
from ecs_components.compute.capacity_providers import create_capacity_providers
from ecs_components.compute.cluster_capacity_providers import create_cluster_capacity_providers
from ecs_components.compute.ecs_cluster import create_cluster
from ecs_components.compute.ecs_service import create_service
from ecs_components.compute.ecs_task import create_task_definition
from ecs_components.compute.task_sets import create_task_sets


@register("accountSettingsDefault", phase=Phase.FOUNDATION)
def account_settings_handler(section_config: Any, ctx: ProvisionContext) -> None:
    settings = create_account_settings_default(
        ctx.config.account_settings_default, ctx.resource_options()
    )
    ctx.add_resources(*settings)
    ctx.export("account_setting_default_ids", [s.id for s in settings])


@register("capacityProviders", phase=Phase.FOUNDATION)
def capacity_providers_handler(section_config: Any, ctx: ProvisionContext) -> None:
    providers = create_capacity_providers(ctx.config.capacity_providers, ctx.resource_options())
    ctx.add_resources(*providers)
    ctx.set("capacity_providers.names", [p.name for p in ctx.config.capacity_providers])
    ctx.export("capacity_provider_arns", [p.arn for p in providers])


@register("cluster", phase=Phase.CLUSTER)
def cluster_handler(section_config: Any, ctx: ProvisionContext) -> None:
    config = ctx.config.cluster
    outputs = create_cluster(config, ctx.resource_options())
    ctx.add_resources(outputs.cluster)
    ctx.set("cluster.name", config.name)
    ctx.set("cluster.arn", outputs.cluster_arn)
    ctx.export("cluster_arn", outputs.cluster_arn)
    ctx.export("cluster_id", outputs.id)


@register("clusterCapacityProvider", phase=Phase.CAPACITY)
def cluster_capacity_provider_handler(section_config: Any, ctx: ProvisionContext) -> None:
    """Attach capacity providers to the cluster.

    clusterName falls back to the cluster section; an empty capacityProviders
    list falls back to the providers created by the capacityProviders section.
    """
    config = ctx.config.cluster_capacity_provider
    if config.cluster_name is None:
        config = dataclasses.replace(config, cluster_name=ctx.require("cluster.name"))
    if not config.capacity_providers and ctx.get("capacity_providers.names"):
        config = dataclasses.replace(config, capacity_providers=ctx.get("capacity_providers.names"))
    resource = create_cluster_capacity_providers(config, ctx.resource_options())
    ctx.add_resources(resource)


@register("taskDefinition", phase=Phase.TASK)
def task_definition_handler(section_config: Any, ctx: ProvisionContext) -> None:
    outputs = create_task_definition(ctx.config.task_definition, ctx.resource_options())
    ctx.add_resources(outputs.task_definition)
    ctx.set("task_definition.arn", outputs.arn)
    ctx.export("task_definition_arn", outputs.arn)


@register("service", phase=Phase.SERVICE)
def service_handler(section_config: Any, ctx: ProvisionContext) -> None:
    """Create the service; clusterArn and taskDefinition fall back to earlier sections."""
    config = ctx.config.service
    if config.cluster_arn is None:
        config = dataclasses.replace(config, cluster_arn=ctx.require("cluster.arn"))
    if config.task_definition is None and ctx.get("task_definition.arn") is not None:
        config = dataclasses.replace(config, task_definition=ctx.get("task_definition.arn"))
    outputs = create_service(config, ctx.resource_options())
    ctx.add_resources(outputs.service)
    ctx.set("service.id", outputs.id)
    ctx.export("service_id", outputs.id)


@register("taskSets", phase=Phase.DEPLOYMENT)
def task_sets_handler(section_config: Any, ctx: ProvisionContext) -> None:
    task_sets = []
    for task_set in ctx.config.task_sets:
        if task_set.cluster is None:
            task_set = dataclasses.replace(task_set, cluster=ctx.require("cluster.arn"))
        if task_set.service is None:
            task_set = dataclasses.replace(task_set, service=ctx.require("service.id"))
        if task_set.task_definition is None:
            task_set = dataclasses.replace(
                task_set, task_definition=ctx.require("task_definition.arn")
            )
        task_sets.append(task_set)
    outputs = create_task_sets(task_sets, ctx.resource_options())
    ctx.add_resources(*(o.task_set for o in outputs))
    ctx.export("task_set_arns", [o.arn for o in outputs])
