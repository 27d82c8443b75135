"""ECS cluster."""

from dataclasses import dataclass

import pulumi
import pulumi_aws

from ecs_components.compute._component import child_opts, new_component
from ecs_components.config import ClusterConfig, ClusterConfigurationConfig


@dataclass
class ClusterOutputs:
    """Outputs from cluster creation."""

    cluster_arn: pulumi.Output[str]
    id: pulumi.Output[str]
    name: pulumi.Output[str]
    cluster: pulumi_aws.ecs.Cluster


def _cluster_configuration(
    configuration: ClusterConfigurationConfig,
) -> pulumi_aws.ecs.ClusterConfigurationArgs:
    execute_command = configuration.execute_command
    log_configuration = None
    if execute_command.log_configuration is not None:
        log = execute_command.log_configuration
        log_configuration = pulumi_aws.ecs.ClusterConfigurationExecuteCommandConfigurationLogConfigurationArgs(
            cloud_watch_encryption_enabled=log.cloud_watch_encryption_enabled,
            cloud_watch_log_group_name=log.cloud_watch_log_group_name,
            s3_bucket_encryption_enabled=log.s3_bucket_encryption_enabled,
            s3_bucket_name=log.s3_bucket_name,
            s3_key_prefix=log.s3_key_prefix,
        )
    return pulumi_aws.ecs.ClusterConfigurationArgs(
        execute_command_configuration=pulumi_aws.ecs.ClusterConfigurationExecuteCommandConfigurationArgs(
            kms_key_id=execute_command.kms_key_id,
            log_configuration=log_configuration,
            logging=execute_command.logging,
        ),
    )


def create_cluster(
    config: ClusterConfig,
    opts: pulumi.ResourceOptions | None = None,
) -> ClusterOutputs:
    """Create ECS cluster with optional execute-command and Service Connect defaults."""
    component = new_component("Cluster", config.name, opts)

    settings = [
        pulumi_aws.ecs.ClusterSettingArgs(name=s.name, value=s.value) for s in config.settings
    ]
    configuration = None
    if config.configuration is not None:
        configuration = _cluster_configuration(config.configuration)
    service_connect_defaults = None
    if config.service_connect_defaults is not None:
        service_connect_defaults = pulumi_aws.ecs.ClusterServiceConnectDefaultsArgs(
            namespace=config.service_connect_defaults.namespace,
        )

    pulumi.log.debug(f"Creating ECS cluster '{config.name}'")
    try:
        cluster = pulumi_aws.ecs.Cluster(
            config.name,
            name=config.name,
            configuration=configuration,
            service_connect_defaults=service_connect_defaults,
            settings=settings or None,
            tags=config.tags,
            opts=child_opts(component),
        )
    except Exception as e:
        raise RuntimeError(f"failed to create new cluster: {e}") from e

    component.register_outputs({"cluster_arn": cluster.arn, "id": cluster.id})
    return ClusterOutputs(
        cluster_arn=cluster.arn,
        id=cluster.id,
        name=cluster.name,
        cluster=cluster,
    )
