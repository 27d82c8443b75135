"""ECS configuration documents: dataclasses, loading and validation."""

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import pulumi
import pulumi_aws
import yaml

from ecs_components.spec.validator import DEFAULT_API_VERSION, validate_ecs_config


def _optional(cls: Any, value: Any) -> Any:
    """Decode a nested object only when it is present."""
    return cls.from_dict(value) if value is not None else None


def _list_of(cls: Any, values: list[dict[str, Any]] | None) -> list[Any]:
    return [cls.from_dict(v) for v in values or []]


# --- account setting defaults ---


@dataclass
class AccountSettingDefaultConfig:
    name: str
    value: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccountSettingDefaultConfig":
        return cls(name=data["name"], value=data["value"])


# --- capacity providers ---


@dataclass
class ManagedScalingConfig:
    instance_warmup_period: int | None = None
    maximum_scaling_step_size: int | None = None
    minimum_scaling_step_size: int | None = None
    status: str | None = None
    target_capacity: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ManagedScalingConfig":
        return cls(
            instance_warmup_period=data.get("instanceWarmupPeriod"),
            maximum_scaling_step_size=data.get("maximumScalingStepSize"),
            minimum_scaling_step_size=data.get("minimumScalingStepSize"),
            status=data.get("status"),
            target_capacity=data.get("targetCapacity"),
        )


@dataclass
class AutoscalingGroupProviderConfig:
    autoscaling_group_arn: str
    managed_draining: str | None = None
    managed_scaling: ManagedScalingConfig | None = None
    managed_termination_protection: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AutoscalingGroupProviderConfig":
        return cls(
            autoscaling_group_arn=data["autoscalingGroupArn"],
            managed_draining=data.get("managedDraining"),
            managed_scaling=_optional(ManagedScalingConfig, data.get("managedScaling")),
            managed_termination_protection=data.get("managedTerminationProtection"),
        )


@dataclass
class CapacityProviderConfig:
    name: str
    autoscaling_group_provider: AutoscalingGroupProviderConfig
    tags: dict[str, str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CapacityProviderConfig":
        return cls(
            name=data["name"],
            autoscaling_group_provider=AutoscalingGroupProviderConfig.from_dict(
                data["autoscalingGroupProvider"]
            ),
            tags=data.get("tags"),
        )


# --- cluster ---


@dataclass
class ExecuteCommandLogConfig:
    cloud_watch_encryption_enabled: bool | None = None
    cloud_watch_log_group_name: str | None = None
    s3_bucket_encryption_enabled: bool | None = None
    s3_bucket_name: str | None = None
    s3_key_prefix: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExecuteCommandLogConfig":
        return cls(
            cloud_watch_encryption_enabled=data.get("cloudWatchEncryptionEnabled"),
            cloud_watch_log_group_name=data.get("cloudWatchLogGroupName"),
            s3_bucket_encryption_enabled=data.get("s3BucketEncryptionEnabled"),
            s3_bucket_name=data.get("s3BucketName"),
            s3_key_prefix=data.get("s3KeyPrefix"),
        )


@dataclass
class ExecuteCommandConfig:
    kms_key_id: str | None = None
    log_configuration: ExecuteCommandLogConfig | None = None
    logging: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExecuteCommandConfig":
        return cls(
            kms_key_id=data.get("kmsKeyId"),
            log_configuration=_optional(ExecuteCommandLogConfig, data.get("logConfiguration")),
            logging=data.get("logging"),
        )


@dataclass
class ClusterConfigurationConfig:
    execute_command: ExecuteCommandConfig = field(default_factory=ExecuteCommandConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClusterConfigurationConfig":
        return cls(execute_command=ExecuteCommandConfig.from_dict(data.get("executeCommand") or {}))


@dataclass
class ServiceConnectDefaultsConfig:
    namespace: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConnectDefaultsConfig":
        return cls(namespace=data["namespace"])


@dataclass
class ClusterSettingConfig:
    name: str
    value: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClusterSettingConfig":
        return cls(name=data["name"], value=data["value"])


@dataclass
class ClusterConfig:
    name: str
    configuration: ClusterConfigurationConfig | None = None
    service_connect_defaults: ServiceConnectDefaultsConfig | None = None
    settings: list[ClusterSettingConfig] = field(default_factory=list)
    tags: dict[str, str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClusterConfig":
        return cls(
            name=data["name"],
            configuration=_optional(ClusterConfigurationConfig, data.get("configuration")),
            service_connect_defaults=_optional(
                ServiceConnectDefaultsConfig, data.get("serviceConnectDefaults")
            ),
            settings=_list_of(ClusterSettingConfig, data.get("settings")),
            tags=data.get("tags"),
        )


# --- cluster capacity providers ---


@dataclass
class CapacityProviderStrategyConfig:
    """Capacity provider strategy item shared by clusters, services and task sets."""

    capacity_provider: str
    base: int | None = None
    weight: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CapacityProviderStrategyConfig":
        # Service configs historically named the provider "name".
        provider = data["capacityProvider"] if "capacityProvider" in data else data["name"]
        return cls(
            capacity_provider=provider,
            base=data.get("base"),
            weight=data.get("weight"),
        )


@dataclass
class ClusterCapacityProviderConfig:
    cluster_name: pulumi.Input[str] | None = None
    capacity_providers: list[str] = field(default_factory=list)
    default_capacity_provider_strategies: list[CapacityProviderStrategyConfig] = field(
        default_factory=list
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClusterCapacityProviderConfig":
        return cls(
            cluster_name=data.get("clusterName"),
            capacity_providers=data.get("capacityProviders") or [],
            default_capacity_provider_strategies=_list_of(
                CapacityProviderStrategyConfig, data.get("defaultCapacityProviderStrategies")
            ),
        )


# --- service ---


@dataclass
class AlarmsConfig:
    alarm_names: list[str] = field(default_factory=list)
    enable: bool = False
    rollback: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlarmsConfig":
        return cls(
            alarm_names=data.get("alarmNames") or [],
            enable=data.get("enable", False),
            rollback=data.get("rollback", False),
        )


@dataclass
class DeploymentCircuitBreakerConfig:
    enable: bool = False
    rollback: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeploymentCircuitBreakerConfig":
        return cls(enable=data.get("enable", False), rollback=data.get("rollback", False))


@dataclass
class DeploymentControllerConfig:
    type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeploymentControllerConfig":
        return cls(type=data.get("type"))


@dataclass
class ServiceLoadBalancerConfig:
    container_name: str
    container_port: int
    elb_name: str | None = None
    target_group_arn: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceLoadBalancerConfig":
        return cls(
            container_name=data["containerName"],
            container_port=data["containerPort"],
            elb_name=data.get("elbName"),
            target_group_arn=data.get("targetGroupArn"),
        )


@dataclass
class NetworkConfigurationConfig:
    """awsvpc network configuration shared by services and task sets."""

    subnets: list[str] = field(default_factory=list)
    assign_public_ip: bool | None = None
    security_groups: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NetworkConfigurationConfig":
        return cls(
            subnets=data.get("subnets") or [],
            assign_public_ip=data.get("assignPublicIp"),
            security_groups=data.get("securityGroups") or [],
        )


@dataclass
class OrderedPlacementStrategyConfig:
    type: str
    field: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderedPlacementStrategyConfig":
        return cls(type=data["type"], field=data.get("field"))


@dataclass
class PlacementConstraintConfig:
    type: str
    expression: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlacementConstraintConfig":
        return cls(type=data["type"], expression=data.get("expression"))


@dataclass
class ServiceRegistryConfig:
    registry_arn: str
    container_name: str | None = None
    container_port: int | None = None
    port: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceRegistryConfig":
        return cls(
            registry_arn=data["registryArn"],
            container_name=data.get("containerName"),
            container_port=data.get("containerPort"),
            port=data.get("port"),
        )


@dataclass
class SecretOptionConfig:
    name: str
    value_from: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SecretOptionConfig":
        return cls(name=data["name"], value_from=data["valueFrom"])


@dataclass
class ServiceConnectLogConfig:
    log_driver: str
    options: dict[str, str] | None = None
    secret_options: list[SecretOptionConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConnectLogConfig":
        return cls(
            log_driver=data["logDriver"],
            options=data.get("options"),
            secret_options=_list_of(SecretOptionConfig, data.get("secretOptions")),
        )


@dataclass
class ClientAliasConfig:
    port: int
    dns_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientAliasConfig":
        return cls(port=data["port"], dns_name=data.get("dnsName"))


@dataclass
class ServiceConnectTimeoutConfig:
    idle_timeout_seconds: int | None = None
    per_request_timeout_seconds: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConnectTimeoutConfig":
        return cls(
            idle_timeout_seconds=data.get("idleTimeoutSeconds"),
            per_request_timeout_seconds=data.get("perRequestTimeoutSeconds"),
        )


@dataclass
class ServiceConnectTlsConfig:
    aws_pca_authority_arn: str
    kms_key: str | None = None
    role_arn: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConnectTlsConfig":
        return cls(
            aws_pca_authority_arn=data["issuerCertAuthority"]["awsPcaAuthorityArn"],
            kms_key=data.get("kmsKey"),
            role_arn=data.get("roleArn"),
        )


@dataclass
class ServiceConnectServiceConfig:
    port_name: str
    client_aliases: list[ClientAliasConfig] = field(default_factory=list)
    discovery_name: str | None = None
    ingress_port_override: int | None = None
    timeout: ServiceConnectTimeoutConfig | None = None
    tls: ServiceConnectTlsConfig | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConnectServiceConfig":
        return cls(
            port_name=data["portName"],
            client_aliases=_list_of(ClientAliasConfig, data.get("clientAlias")),
            discovery_name=data.get("discoveryName"),
            ingress_port_override=data.get("ingressPortOverride"),
            timeout=_optional(ServiceConnectTimeoutConfig, data.get("timeout")),
            tls=_optional(ServiceConnectTlsConfig, data.get("tls")),
        )


@dataclass
class ServiceConnectConfig:
    enabled: bool = False
    log_configuration: ServiceConnectLogConfig | None = None
    namespace: str | None = None
    services: list[ServiceConnectServiceConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConnectConfig":
        return cls(
            enabled=data.get("enabled", False),
            log_configuration=_optional(ServiceConnectLogConfig, data.get("logConfiguration")),
            namespace=data.get("namespace"),
            services=_list_of(ServiceConnectServiceConfig, data.get("services")),
        )


@dataclass
class ManagedEbsVolumeConfig:
    role_arn: str
    encrypted: bool | None = None
    file_system_type: str | None = None
    iops: int | None = None
    kms_key_id: str | None = None
    size_in_gb: int | None = None
    snapshot_id: str | None = None
    throughput: str | None = None
    volume_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ManagedEbsVolumeConfig":
        return cls(
            role_arn=data["roleArn"],
            encrypted=data.get("encrypted"),
            file_system_type=data.get("fileSystemType"),
            iops=data.get("iops"),
            kms_key_id=data.get("kmsKeyId"),
            size_in_gb=data.get("sizeInGb"),
            snapshot_id=data.get("snapshotId"),
            throughput=data.get("throughput"),
            volume_type=data.get("volumeType"),
        )


@dataclass
class ServiceVolumeConfig:
    name: str
    managed_ebs_volume: ManagedEbsVolumeConfig

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceVolumeConfig":
        return cls(
            name=data["name"],
            managed_ebs_volume=ManagedEbsVolumeConfig.from_dict(data["managedEBSVolume"]),
        )


@dataclass
class ServiceConfig:
    name: str
    cluster_arn: pulumi.Input[str] | None = None
    alarms: AlarmsConfig | None = None
    capacity_provider_strategies: list[CapacityProviderStrategyConfig] = field(default_factory=list)
    deployment_circuit_breaker: DeploymentCircuitBreakerConfig | None = None
    deployment_controller: DeploymentControllerConfig | None = None
    deployment_maximum_percent: int | None = None
    deployment_minimum_healthy_percent: int | None = None
    desired_count: int | None = None
    enable_ecs_managed_tags: bool | None = None
    enable_execute_command: bool | None = None
    force_new_deployment: bool | None = None
    health_check_grace_period_seconds: int | None = None
    iam_role: str | None = None
    launch_type: str | None = None
    load_balancers: list[ServiceLoadBalancerConfig] = field(default_factory=list)
    network_configuration: NetworkConfigurationConfig | None = None
    ordered_placement_strategies: list[OrderedPlacementStrategyConfig] = field(default_factory=list)
    placement_constraints: list[PlacementConstraintConfig] = field(default_factory=list)
    platform_version: str | None = None
    propagate_tags: str | None = None
    scheduling_strategy: str | None = None
    service_connect_configuration: ServiceConnectConfig | None = None
    service_registry: ServiceRegistryConfig | None = None
    volume_configuration: ServiceVolumeConfig | None = None
    tags: dict[str, str] | None = None
    task_definition: pulumi.Input[str] | None = None
    triggers: dict[str, str] | None = None
    wait_for_steady_state: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConfig":
        return cls(
            name=data["name"],
            cluster_arn=data.get("clusterArn"),
            alarms=_optional(AlarmsConfig, data.get("alarms")),
            capacity_provider_strategies=_list_of(
                CapacityProviderStrategyConfig, data.get("capacityProviderStrategies")
            ),
            deployment_circuit_breaker=_optional(
                DeploymentCircuitBreakerConfig, data.get("deploymentCircuitBreaker")
            ),
            deployment_controller=_optional(
                DeploymentControllerConfig, data.get("deploymentController")
            ),
            deployment_maximum_percent=data.get("deploymentMaximumPercent"),
            deployment_minimum_healthy_percent=data.get("deploymentMinimumHealthyPercent"),
            desired_count=data.get("desiredCount"),
            enable_ecs_managed_tags=data.get("enableEcsManagedTags"),
            enable_execute_command=data.get("enableExecuteCommand"),
            force_new_deployment=data.get("forceNewDeployment"),
            health_check_grace_period_seconds=data.get("healthCheckGracePeriodSeconds"),
            iam_role=data.get("iamRole"),
            launch_type=data.get("launchType"),
            load_balancers=_list_of(ServiceLoadBalancerConfig, data.get("loadBalancers")),
            network_configuration=_optional(
                NetworkConfigurationConfig, data.get("networkConfiguration")
            ),
            ordered_placement_strategies=_list_of(
                OrderedPlacementStrategyConfig, data.get("orderedPlacementStrategies")
            ),
            placement_constraints=_list_of(
                PlacementConstraintConfig, data.get("placementConstraints")
            ),
            platform_version=data.get("platformVersion"),
            propagate_tags=data.get("propagateTags"),
            scheduling_strategy=data.get("schedulingStrategy"),
            service_connect_configuration=_optional(
                ServiceConnectConfig, data.get("serviceConnectConfiguration")
            ),
            service_registry=_optional(ServiceRegistryConfig, data.get("serviceRegistry")),
            volume_configuration=_optional(
                ServiceVolumeConfig, data.get("serviceVolumeConfiguration")
            ),
            tags=data.get("tags"),
            task_definition=data.get("taskDefinition"),
            triggers=data.get("triggers"),
            wait_for_steady_state=data.get("waitForSteadyState"),
        )


# --- task definition ---


@dataclass
class InferenceAcceleratorConfig:
    device_name: str
    device_type: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InferenceAcceleratorConfig":
        return cls(device_name=data["deviceName"], device_type=data["deviceType"])


@dataclass
class ProxyConfigurationConfig:
    container_name: str
    properties: dict[str, str] | None = None
    type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProxyConfigurationConfig":
        return cls(
            container_name=data["containerName"],
            properties=data.get("properties"),
            type=data.get("type"),
        )


@dataclass
class RuntimePlatformConfig:
    cpu_architecture: str | None = None
    operating_system_family: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimePlatformConfig":
        return cls(
            cpu_architecture=data.get("cpuArchitecture"),
            operating_system_family=data.get("operatingSystemFamily"),
        )


@dataclass
class DockerVolumeConfig:
    autoprovision: bool | None = None
    driver: str | None = None
    driver_opts: dict[str, str] | None = None
    labels: dict[str, str] | None = None
    scope: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DockerVolumeConfig":
        return cls(
            autoprovision=data.get("autoprovision"),
            driver=data.get("driver"),
            driver_opts=data.get("driverOpts"),
            labels=data.get("labels"),
            scope=data.get("scope"),
        )


@dataclass
class EfsAuthorizationConfig:
    access_point_id: str | None = None
    iam: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EfsAuthorizationConfig":
        return cls(access_point_id=data.get("accessPointId"), iam=data.get("iam"))


@dataclass
class EfsVolumeConfig:
    file_system_id: str
    authorization_config: EfsAuthorizationConfig | None = None
    root_directory: str | None = None
    transit_encryption: str | None = None
    transit_encryption_port: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EfsVolumeConfig":
        return cls(
            file_system_id=data["fileSystemId"],
            authorization_config=_optional(
                EfsAuthorizationConfig, data.get("authorizationConfig")
            ),
            root_directory=data.get("rootDirectory"),
            transit_encryption=data.get("transitEncryption"),
            transit_encryption_port=data.get("transitEncryptionPort"),
        )


@dataclass
class FsxWindowsFileServerVolumeConfig:
    file_system_id: str
    root_directory: str
    credentials_parameter: str
    domain: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FsxWindowsFileServerVolumeConfig":
        auth = data["authorizationConfig"]
        return cls(
            file_system_id=data["fileSystemId"],
            root_directory=data["rootDirectory"],
            credentials_parameter=auth["credentialsParameter"],
            domain=auth["domain"],
        )


@dataclass
class VolumeConfig:
    name: str
    configure_at_launch: bool | None = None
    docker_volume_configuration: DockerVolumeConfig | None = None
    efs_volume_configuration: EfsVolumeConfig | None = None
    fsx_windows_file_server_volume_configuration: FsxWindowsFileServerVolumeConfig | None = None
    host_path: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VolumeConfig":
        return cls(
            name=data["name"],
            configure_at_launch=data.get("configureAtLaunch"),
            docker_volume_configuration=_optional(
                DockerVolumeConfig, data.get("dockerVolumeConfiguration")
            ),
            efs_volume_configuration=_optional(EfsVolumeConfig, data.get("efsVolumeConfiguration")),
            fsx_windows_file_server_volume_configuration=_optional(
                FsxWindowsFileServerVolumeConfig,
                data.get("fsxWindowsFileServerVolumeConfiguration"),
            ),
            host_path=data.get("hostPath"),
        )


@dataclass
class TaskDefinitionConfig:
    name: str
    container_definitions: list[dict[str, Any]] = field(default_factory=list)
    cpu: str | None = None
    ephemeral_storage_size_in_gb: int | None = None
    execution_role_arn: str | None = None
    inference_accelerators: list[InferenceAcceleratorConfig] = field(default_factory=list)
    ipc_mode: str | None = None
    memory: str | None = None
    network_mode: str | None = None
    pid_mode: str | None = None
    placement_constraints: list[PlacementConstraintConfig] = field(default_factory=list)
    proxy_configuration: ProxyConfigurationConfig | None = None
    requires_compatibilities: list[str] = field(default_factory=list)
    runtime_platform: RuntimePlatformConfig | None = None
    skip_destroy: bool | None = None
    tags: dict[str, str] | None = None
    task_role_arn: str | None = None
    track_latest: bool | None = None
    volumes: list[VolumeConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskDefinitionConfig":
        ephemeral = data.get("ephemeralStorage")
        return cls(
            name=data["name"],
            container_definitions=data.get("containerDefinitions") or [],
            cpu=data.get("cpu"),
            ephemeral_storage_size_in_gb=ephemeral["sizeInGb"] if ephemeral else None,
            execution_role_arn=data.get("executionRoleArn"),
            inference_accelerators=_list_of(
                InferenceAcceleratorConfig, data.get("inferenceAccelerators")
            ),
            ipc_mode=data.get("ipcMode"),
            memory=data.get("memory"),
            network_mode=data.get("networkMode"),
            pid_mode=data.get("pidMode"),
            placement_constraints=_list_of(
                PlacementConstraintConfig, data.get("placementConstraints")
            ),
            proxy_configuration=_optional(
                ProxyConfigurationConfig, data.get("proxyConfiguration")
            ),
            requires_compatibilities=data.get("requiresCompatibilities") or [],
            runtime_platform=_optional(RuntimePlatformConfig, data.get("runtimePlatform")),
            skip_destroy=data.get("skipDestroy"),
            tags=data.get("tags"),
            task_role_arn=data.get("taskRoleArn"),
            track_latest=data.get("trackLatest"),
            volumes=_list_of(VolumeConfig, data.get("volumes")),
        )


# --- task sets ---


@dataclass
class TaskSetLoadBalancerConfig:
    container_name: str
    container_port: int | None = None
    load_balancer_name: str | None = None
    target_group_arn: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskSetLoadBalancerConfig":
        return cls(
            container_name=data["containerName"],
            container_port=data.get("containerPort"),
            load_balancer_name=data.get("loadBalancerName"),
            target_group_arn=data.get("targetGroupArn"),
        )


@dataclass
class ScaleConfig:
    unit: str | None = None
    value: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScaleConfig":
        return cls(unit=data.get("unit"), value=data.get("value"))


@dataclass
class TaskSetConfig:
    name: str
    cluster: pulumi.Input[str] | None = None
    service: pulumi.Input[str] | None = None
    task_definition: pulumi.Input[str] | None = None
    capacity_provider_strategies: list[CapacityProviderStrategyConfig] = field(default_factory=list)
    external_id: str | None = None
    force_delete: bool | None = None
    launch_type: str | None = None
    load_balancers: list[TaskSetLoadBalancerConfig] = field(default_factory=list)
    network_configuration: NetworkConfigurationConfig | None = None
    platform_version: str | None = None
    scale: ScaleConfig | None = None
    service_registries: ServiceRegistryConfig | None = None
    tags: dict[str, str] | None = None
    wait_until_stable: bool | None = None
    wait_until_stable_timeout: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskSetConfig":
        return cls(
            name=data["name"],
            cluster=data.get("cluster"),
            service=data.get("service"),
            task_definition=data.get("taskDefinition"),
            capacity_provider_strategies=_list_of(
                CapacityProviderStrategyConfig, data.get("capacityProviderStrategies")
            ),
            external_id=data.get("externalId"),
            force_delete=data.get("forceDelete"),
            launch_type=data.get("launchType"),
            load_balancers=_list_of(TaskSetLoadBalancerConfig, data.get("loadBalancers")),
            network_configuration=_optional(
                NetworkConfigurationConfig, data.get("networkConfiguration")
            ),
            platform_version=data.get("platformVersion"),
            scale=_optional(ScaleConfig, data.get("scale")),
            service_registries=_optional(ServiceRegistryConfig, data.get("serviceRegistries")),
            tags=data.get("tags"),
            wait_until_stable=data.get("waitUntilStable"),
            wait_until_stable_timeout=data.get("waitUntilStableTimeout"),
        )


# --- document ---

SECTIONS = [
    "accountSettingsDefault",
    "capacityProviders",
    "cluster",
    "clusterCapacityProvider",
    "taskDefinition",
    "service",
    "taskSets",
]


@dataclass
class EcsConfig:
    """Parsed and validated ECS configuration document."""

    raw: dict[str, Any]
    api_version: str = DEFAULT_API_VERSION
    project: str = "ecs-components"
    account_settings_default: list[AccountSettingDefaultConfig] = field(default_factory=list)
    capacity_providers: list[CapacityProviderConfig] = field(default_factory=list)
    cluster: ClusterConfig | None = None
    cluster_capacity_provider: ClusterCapacityProviderConfig | None = None
    service: ServiceConfig | None = None
    task_definition: TaskDefinitionConfig | None = None
    task_sets: list[TaskSetConfig] = field(default_factory=list)

    @property
    def sections(self) -> dict[str, Any]:
        """Return declared (present and non-None) sections and their raw config (for registry)."""
        return {k: self.raw[k] for k in SECTIONS if self.raw.get(k) is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EcsConfig":
        """Validate a decoded document and build the section dataclasses."""
        try:
            validate_ecs_config(data)
        except jsonschema.ValidationError as e:
            raise SystemExit(e.message) from e

        return cls(
            raw=data,
            api_version=data.get("apiVersion", DEFAULT_API_VERSION),
            project=data.get("project", "ecs-components"),
            account_settings_default=_list_of(
                AccountSettingDefaultConfig, data.get("accountSettingsDefault")
            ),
            capacity_providers=_list_of(CapacityProviderConfig, data.get("capacityProviders")),
            cluster=_optional(ClusterConfig, data.get("cluster")),
            cluster_capacity_provider=_optional(
                ClusterCapacityProviderConfig, data.get("clusterCapacityProvider")
            ),
            service=_optional(ServiceConfig, data.get("service")),
            task_definition=_optional(TaskDefinitionConfig, data.get("taskDefinition")),
            task_sets=_list_of(TaskSetConfig, data.get("taskSets")),
        )

    @classmethod
    def from_file(cls, path: str) -> "EcsConfig":
        """Load and validate a JSON or YAML config document from file path."""
        file_path = Path(path)
        if not file_path.is_file():
            raise SystemExit(f"ECS config not found: {path}")

        try:
            with open(file_path, encoding="utf-8") as f:
                if file_path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise SystemExit(f"Error unmarshaling config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise SystemExit(f"ECS config must be an object: {path}")
        return cls.from_dict(data)


def load_ecs_config() -> EcsConfig:
    """Load the ECS config document from ECS_CONFIG_PATH environment variable."""
    path = os.environ.get("ECS_CONFIG_PATH")
    if not path:
        raise SystemExit("ECS_CONFIG_PATH environment variable required")
    if not Path(path).is_file():
        raise SystemExit("ECS_CONFIG_PATH must point to an ECS config file")
    return EcsConfig.from_file(path)


def create_aws_provider(project: str, region: str) -> pulumi_aws.Provider:
    """Create AWS provider with default resource tags."""
    return pulumi_aws.Provider(
        "aws-tagged",
        region=region,
        default_tags=pulumi_aws.ProviderDefaultTagsArgs(
            tags={
                "project": project,
                "managed-by": "ecs-components",
            }
        ),
    )
