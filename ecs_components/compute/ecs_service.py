"""ECS service, including Service Connect and managed EBS volume configuration."""

from dataclasses import dataclass

import pulumi
import pulumi_aws

from ecs_components.compute._component import child_opts, new_component
from ecs_components.config import (
    ServiceConfig,
    ServiceConnectConfig,
    ServiceConnectServiceConfig,
    ServiceVolumeConfig,
)


@dataclass
class ServiceOutputs:
    """Outputs from service creation."""

    id: pulumi.Output[str]
    name: pulumi.Output[str]
    service: pulumi_aws.ecs.Service


def _service_connect_service(
    service: ServiceConnectServiceConfig,
) -> pulumi_aws.ecs.ServiceServiceConnectConfigurationServiceArgs:
    client_aliases = [
        pulumi_aws.ecs.ServiceServiceConnectConfigurationServiceClientAliasArgs(
            port=alias.port,
            dns_name=alias.dns_name,
        )
        for alias in service.client_aliases
    ]
    timeout = None
    if service.timeout is not None:
        timeout = pulumi_aws.ecs.ServiceServiceConnectConfigurationServiceTimeoutArgs(
            idle_timeout_seconds=service.timeout.idle_timeout_seconds,
            per_request_timeout_seconds=service.timeout.per_request_timeout_seconds,
        )
    tls = None
    if service.tls is not None:
        tls = pulumi_aws.ecs.ServiceServiceConnectConfigurationServiceTlsArgs(
            issuer_cert_authority=pulumi_aws.ecs.ServiceServiceConnectConfigurationServiceTlsIssuerCertAuthorityArgs(
                aws_pca_authority_arn=service.tls.aws_pca_authority_arn,
            ),
            kms_key=service.tls.kms_key,
            role_arn=service.tls.role_arn,
        )
    return pulumi_aws.ecs.ServiceServiceConnectConfigurationServiceArgs(
        port_name=service.port_name,
        client_alias=client_aliases or None,
        discovery_name=service.discovery_name,
        ingress_port_override=service.ingress_port_override,
        timeout=timeout,
        tls=tls,
    )


def _service_connect_configuration(
    connect: ServiceConnectConfig,
) -> pulumi_aws.ecs.ServiceServiceConnectConfigurationArgs:
    """Build Service Connect args; each service keeps only its own client aliases."""
    log_configuration = None
    if connect.log_configuration is not None:
        log = connect.log_configuration
        secret_options = [
            pulumi_aws.ecs.ServiceServiceConnectConfigurationLogConfigurationSecretOptionArgs(
                name=o.name,
                value_from=o.value_from,
            )
            for o in log.secret_options
        ]
        log_configuration = pulumi_aws.ecs.ServiceServiceConnectConfigurationLogConfigurationArgs(
            log_driver=log.log_driver,
            options=log.options,
            secret_options=secret_options or None,
        )
    services = [_service_connect_service(s) for s in connect.services]
    return pulumi_aws.ecs.ServiceServiceConnectConfigurationArgs(
        enabled=connect.enabled,
        log_configuration=log_configuration,
        namespace=connect.namespace,
        services=services or None,
    )


def _volume_configuration(
    volume: ServiceVolumeConfig,
) -> pulumi_aws.ecs.ServiceVolumeConfigurationArgs:
    ebs = volume.managed_ebs_volume
    return pulumi_aws.ecs.ServiceVolumeConfigurationArgs(
        name=volume.name,
        managed_ebs_volume=pulumi_aws.ecs.ServiceVolumeConfigurationManagedEbsVolumeArgs(
            role_arn=ebs.role_arn,
            encrypted=ebs.encrypted,
            file_system_type=ebs.file_system_type,
            iops=ebs.iops,
            kms_key_id=ebs.kms_key_id,
            size_in_gb=ebs.size_in_gb,
            snapshot_id=ebs.snapshot_id,
            throughput=ebs.throughput,
            volume_type=ebs.volume_type,
        ),
    )


def create_service(
    config: ServiceConfig,
    opts: pulumi.ResourceOptions | None = None,
) -> ServiceOutputs:
    """Create ECS service; nested settings are passed only when configured."""
    component = new_component("Service", config.name, opts)

    alarms = None
    if config.alarms is not None:
        alarms = pulumi_aws.ecs.ServiceAlarmsArgs(
            alarm_names=config.alarms.alarm_names,
            enable=config.alarms.enable,
            rollback=config.alarms.rollback,
        )
    capacity_provider_strategies = [
        pulumi_aws.ecs.ServiceCapacityProviderStrategyArgs(
            capacity_provider=s.capacity_provider,
            base=s.base,
            weight=s.weight,
        )
        for s in config.capacity_provider_strategies
    ]
    deployment_circuit_breaker = None
    if config.deployment_circuit_breaker is not None:
        deployment_circuit_breaker = pulumi_aws.ecs.ServiceDeploymentCircuitBreakerArgs(
            enable=config.deployment_circuit_breaker.enable,
            rollback=config.deployment_circuit_breaker.rollback,
        )
    deployment_controller = None
    if config.deployment_controller is not None:
        deployment_controller = pulumi_aws.ecs.ServiceDeploymentControllerArgs(
            type=config.deployment_controller.type,
        )
    load_balancers = [
        pulumi_aws.ecs.ServiceLoadBalancerArgs(
            container_name=lb.container_name,
            container_port=lb.container_port,
            elb_name=lb.elb_name,
            target_group_arn=lb.target_group_arn,
        )
        for lb in config.load_balancers
    ]
    network_configuration = None
    if config.network_configuration is not None:
        network_configuration = pulumi_aws.ecs.ServiceNetworkConfigurationArgs(
            subnets=config.network_configuration.subnets,
            assign_public_ip=config.network_configuration.assign_public_ip,
            security_groups=config.network_configuration.security_groups or None,
        )
    ordered_placement_strategies = [
        pulumi_aws.ecs.ServiceOrderedPlacementStrategyArgs(type=s.type, field=s.field)
        for s in config.ordered_placement_strategies
    ]
    placement_constraints = [
        pulumi_aws.ecs.ServicePlacementConstraintArgs(type=c.type, expression=c.expression)
        for c in config.placement_constraints
    ]
    service_registries = None
    if config.service_registry is not None:
        service_registries = pulumi_aws.ecs.ServiceServiceRegistriesArgs(
            registry_arn=config.service_registry.registry_arn,
            container_name=config.service_registry.container_name,
            container_port=config.service_registry.container_port,
            port=config.service_registry.port,
        )
    service_connect_configuration = None
    if config.service_connect_configuration is not None:
        service_connect_configuration = _service_connect_configuration(
            config.service_connect_configuration
        )
    volume_configuration = None
    if config.volume_configuration is not None:
        volume_configuration = _volume_configuration(config.volume_configuration)

    pulumi.log.debug(f"Creating ECS service '{config.name}'")
    try:
        service = pulumi_aws.ecs.Service(
            config.name,
            name=config.name,
            cluster=config.cluster_arn,
            alarms=alarms,
            capacity_provider_strategies=capacity_provider_strategies or None,
            deployment_circuit_breaker=deployment_circuit_breaker,
            deployment_controller=deployment_controller,
            deployment_maximum_percent=config.deployment_maximum_percent,
            deployment_minimum_healthy_percent=config.deployment_minimum_healthy_percent,
            desired_count=config.desired_count,
            enable_ecs_managed_tags=config.enable_ecs_managed_tags,
            enable_execute_command=config.enable_execute_command,
            force_new_deployment=config.force_new_deployment,
            health_check_grace_period_seconds=config.health_check_grace_period_seconds,
            iam_role=config.iam_role,
            launch_type=config.launch_type,
            load_balancers=load_balancers or None,
            network_configuration=network_configuration,
            ordered_placement_strategies=ordered_placement_strategies or None,
            placement_constraints=placement_constraints or None,
            platform_version=config.platform_version,
            propagate_tags=config.propagate_tags,
            scheduling_strategy=config.scheduling_strategy,
            service_connect_configuration=service_connect_configuration,
            service_registries=service_registries,
            tags=config.tags,
            task_definition=config.task_definition,
            triggers=config.triggers,
            volume_configuration=volume_configuration,
            wait_for_steady_state=config.wait_for_steady_state,
            opts=child_opts(component),
        )
    except Exception as e:
        raise RuntimeError(f"failed to create new service: {e}") from e

    component.register_outputs({"id": service.id})
    return ServiceOutputs(id=service.id, name=service.name, service=service)
