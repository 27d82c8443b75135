"""ECS task definition and its volume configuration builders."""

from dataclasses import dataclass
import json
from typing import Any

import pulumi
import pulumi_aws

from ecs_components.compute._component import child_opts, new_component
from ecs_components.config import TaskDefinitionConfig, VolumeConfig


@dataclass
class TaskDefinitionOutputs:
    """Outputs from task definition creation."""

    arn: pulumi.Output[str]
    family: pulumi.Output[str]
    revision: pulumi.Output[int]
    task_definition: pulumi_aws.ecs.TaskDefinition


def _container_definitions_json(definitions: list[dict[str, Any]]) -> str:
    """Serialize container definitions to the JSON string the provider expects."""
    try:
        return json.dumps(definitions)
    except (TypeError, ValueError) as e:
        raise RuntimeError(f"could not marshal container definitions json: {e}") from e


def _volume(volume: VolumeConfig) -> pulumi_aws.ecs.TaskDefinitionVolumeArgs:
    docker = None
    if volume.docker_volume_configuration is not None:
        d = volume.docker_volume_configuration
        docker = pulumi_aws.ecs.TaskDefinitionVolumeDockerVolumeConfigurationArgs(
            autoprovision=d.autoprovision,
            driver=d.driver,
            driver_opts=d.driver_opts,
            labels=d.labels,
            scope=d.scope,
        )

    efs = None
    if volume.efs_volume_configuration is not None:
        e = volume.efs_volume_configuration
        authorization_config = None
        if e.authorization_config is not None:
            authorization_config = pulumi_aws.ecs.TaskDefinitionVolumeEfsVolumeConfigurationAuthorizationConfigArgs(
                access_point_id=e.authorization_config.access_point_id,
                iam=e.authorization_config.iam,
            )
        efs = pulumi_aws.ecs.TaskDefinitionVolumeEfsVolumeConfigurationArgs(
            file_system_id=e.file_system_id,
            authorization_config=authorization_config,
            root_directory=e.root_directory,
            transit_encryption=e.transit_encryption,
            transit_encryption_port=e.transit_encryption_port,
        )

    fsx = None
    if volume.fsx_windows_file_server_volume_configuration is not None:
        f = volume.fsx_windows_file_server_volume_configuration
        fsx = pulumi_aws.ecs.TaskDefinitionVolumeFsxWindowsFileServerVolumeConfigurationArgs(
            authorization_config=pulumi_aws.ecs.TaskDefinitionVolumeFsxWindowsFileServerVolumeConfigurationAuthorizationConfigArgs(
                credentials_parameter=f.credentials_parameter,
                domain=f.domain,
            ),
            file_system_id=f.file_system_id,
            root_directory=f.root_directory,
        )

    return pulumi_aws.ecs.TaskDefinitionVolumeArgs(
        name=volume.name,
        configure_at_launch=volume.configure_at_launch,
        docker_volume_configuration=docker,
        efs_volume_configuration=efs,
        fsx_windows_file_server_volume_configuration=fsx,
        host_path=volume.host_path,
    )


def create_task_definition(
    config: TaskDefinitionConfig,
    opts: pulumi.ResourceOptions | None = None,
) -> TaskDefinitionOutputs:
    """Create ECS task definition; the config name becomes the task family."""
    component = new_component("TaskDefinition", config.name, opts)
    container_definitions = _container_definitions_json(config.container_definitions)

    ephemeral_storage = None
    if config.ephemeral_storage_size_in_gb is not None:
        ephemeral_storage = pulumi_aws.ecs.TaskDefinitionEphemeralStorageArgs(
            size_in_gib=config.ephemeral_storage_size_in_gb,
        )
    inference_accelerators = [
        pulumi_aws.ecs.TaskDefinitionInferenceAcceleratorArgs(
            device_name=a.device_name,
            device_type=a.device_type,
        )
        for a in config.inference_accelerators
    ]
    placement_constraints = [
        pulumi_aws.ecs.TaskDefinitionPlacementConstraintArgs(type=c.type, expression=c.expression)
        for c in config.placement_constraints
    ]
    proxy_configuration = None
    if config.proxy_configuration is not None:
        proxy_configuration = pulumi_aws.ecs.TaskDefinitionProxyConfigurationArgs(
            container_name=config.proxy_configuration.container_name,
            properties=config.proxy_configuration.properties,
            type=config.proxy_configuration.type,
        )
    runtime_platform = None
    if config.runtime_platform is not None:
        runtime_platform = pulumi_aws.ecs.TaskDefinitionRuntimePlatformArgs(
            cpu_architecture=config.runtime_platform.cpu_architecture,
            operating_system_family=config.runtime_platform.operating_system_family,
        )
    volumes = [_volume(v) for v in config.volumes]

    pulumi.log.debug(f"Creating ECS task definition '{config.name}'")
    try:
        task_def = pulumi_aws.ecs.TaskDefinition(
            config.name,
            family=config.name,
            container_definitions=container_definitions,
            cpu=config.cpu,
            ephemeral_storage=ephemeral_storage,
            execution_role_arn=config.execution_role_arn,
            inference_accelerators=inference_accelerators or None,
            ipc_mode=config.ipc_mode,
            memory=config.memory,
            network_mode=config.network_mode,
            pid_mode=config.pid_mode,
            placement_constraints=placement_constraints or None,
            proxy_configuration=proxy_configuration,
            requires_compatibilities=config.requires_compatibilities or None,
            runtime_platform=runtime_platform,
            skip_destroy=config.skip_destroy,
            tags=config.tags,
            task_role_arn=config.task_role_arn,
            track_latest=config.track_latest,
            volumes=volumes or None,
            opts=child_opts(component),
        )
    except Exception as e:
        raise RuntimeError(f"failed to create new task definition: {e}") from e

    component.register_outputs({"arn": task_def.arn})
    return TaskDefinitionOutputs(
        arn=task_def.arn,
        family=task_def.family,
        revision=task_def.revision,
        task_definition=task_def,
    )
