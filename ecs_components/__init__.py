"""Pulumi constructors for AWS ECS resources driven by JSON-shaped configuration."""

from ecs_components.compute.account_settings import create_account_settings_default
from ecs_components.compute.capacity_providers import create_capacity_providers
from ecs_components.compute.cluster_capacity_providers import create_cluster_capacity_providers
from ecs_components.compute.ecs_cluster import ClusterOutputs, create_cluster
from ecs_components.compute.ecs_service import ServiceOutputs, create_service
from ecs_components.compute.ecs_task import TaskDefinitionOutputs, create_task_definition
from ecs_components.compute.task_sets import TaskSetOutputs, create_task_sets
from ecs_components.config import EcsConfig, load_ecs_config

__all__ = [
    "ClusterOutputs",
    "EcsConfig",
    "ServiceOutputs",
    "TaskDefinitionOutputs",
    "TaskSetOutputs",
    "create_account_settings_default",
    "create_capacity_providers",
    "create_cluster",
    "create_cluster_capacity_providers",
    "create_service",
    "create_task_definition",
    "create_task_sets",
    "load_ecs_config",
]
