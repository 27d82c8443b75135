"""Tests for account setting defaults, capacity providers and cluster capacity providers."""

from unittest.mock import MagicMock, call, patch

import pytest

from ecs_components.compute._component import COMPONENT_PREFIX
from ecs_components.compute.account_settings import create_account_settings_default
from ecs_components.compute.capacity_providers import create_capacity_providers
from ecs_components.compute.cluster_capacity_providers import create_cluster_capacity_providers
from ecs_components.config import (
    AccountSettingDefaultConfig,
    CapacityProviderConfig,
    ClusterCapacityProviderConfig,
)


@patch("ecs_components.compute._component.pulumi.ComponentResource")
@patch("ecs_components.compute.account_settings.pulumi_aws.ecs.AccountSettingDefault")
def test_account_settings_one_component_per_setting(mock_setting: MagicMock, mock_component: MagicMock) -> None:
    """Every setting gets its own component and a child named after the setting."""
    settings = [
        AccountSettingDefaultConfig(name="containerInsights", value="enabled"),
        AccountSettingDefaultConfig(name="awsvpcTrunking", value="enabled"),
    ]
    result = create_account_settings_default(settings)

    assert mock_component.call_args_list == [
        call(f"{COMPONENT_PREFIX}:AccountSettingDefault", "containerInsights", None, None),
        call(f"{COMPONENT_PREFIX}:AccountSettingDefault", "awsvpcTrunking", None, None),
    ]
    assert [c[0][0] for c in mock_setting.call_args_list] == ["containerInsights", "awsvpcTrunking"]
    first_kw = mock_setting.call_args_list[0][1]
    assert first_kw["name"] == "containerInsights"
    assert first_kw["value"] == "enabled"
    assert len(result) == 2


@patch("ecs_components.compute._component.pulumi.ComponentResource")
@patch("ecs_components.compute.account_settings.pulumi_aws.ecs.AccountSettingDefault")
def test_account_settings_empty_list(mock_setting: MagicMock, mock_component: MagicMock) -> None:
    assert create_account_settings_default([]) == []
    mock_setting.assert_not_called()
    mock_component.assert_not_called()


@patch("ecs_components.compute._component.pulumi.ComponentResource")
@patch("ecs_components.compute.account_settings.pulumi_aws.ecs.AccountSettingDefault")
def test_account_settings_wraps_provider_error(mock_setting: MagicMock, mock_component: MagicMock) -> None:
    mock_setting.side_effect = Exception("invalid setting")
    with pytest.raises(RuntimeError, match="failed to create new default account setting: invalid setting"):
        create_account_settings_default([AccountSettingDefaultConfig(name="bogus", value="x")])


@patch("ecs_components.compute._component.pulumi.ComponentResource")
@patch("ecs_components.compute.capacity_providers.pulumi_aws.ecs.CapacityProvider")
def test_create_capacity_providers(mock_provider: MagicMock, mock_component: MagicMock) -> None:
    """Auto Scaling group settings, including managed scaling, reach the provider."""
    providers = [
        CapacityProviderConfig.from_dict(
            {
                "name": "ec2-on-demand",
                "autoscalingGroupProvider": {
                    "autoscalingGroupArn": "arn:asg",
                    "managedDraining": "ENABLED",
                    "managedTerminationProtection": "DISABLED",
                    "managedScaling": {"status": "ENABLED", "targetCapacity": 90, "maximumScalingStepSize": 10},
                },
                "tags": {"team": "platform"},
            }
        )
    ]
    result = create_capacity_providers(providers)

    mock_component.assert_called_once_with(f"{COMPONENT_PREFIX}:CapacityProvider", "ec2-on-demand", None, None)
    args, call_kw = mock_provider.call_args
    assert args[0] == "ec2-on-demand"
    assert call_kw["name"] == "ec2-on-demand"
    assert call_kw["tags"] == {"team": "platform"}
    asg = call_kw["auto_scaling_group_provider"]
    assert asg.auto_scaling_group_arn == "arn:asg"
    assert asg.managed_draining == "ENABLED"
    assert asg.managed_termination_protection == "DISABLED"
    assert asg.managed_scaling.target_capacity == 90
    assert asg.managed_scaling.maximum_scaling_step_size == 10
    assert asg.managed_scaling.instance_warmup_period is None
    assert result == [mock_provider.return_value]


@patch("ecs_components.compute._component.pulumi.ComponentResource")
@patch("ecs_components.compute.capacity_providers.pulumi_aws.ecs.CapacityProvider")
def test_capacity_provider_without_managed_scaling(mock_provider: MagicMock, mock_component: MagicMock) -> None:
    providers = [
        CapacityProviderConfig.from_dict({"name": "cp", "autoscalingGroupProvider": {"autoscalingGroupArn": "arn"}})
    ]
    create_capacity_providers(providers)
    assert mock_provider.call_args[1]["auto_scaling_group_provider"].managed_scaling is None


@patch("ecs_components.compute._component.pulumi.ComponentResource")
@patch("ecs_components.compute.capacity_providers.pulumi_aws.ecs.CapacityProvider")
def test_capacity_providers_wraps_provider_error(mock_provider: MagicMock, mock_component: MagicMock) -> None:
    mock_provider.side_effect = Exception("asg not found")
    providers = [
        CapacityProviderConfig.from_dict({"name": "cp", "autoscalingGroupProvider": {"autoscalingGroupArn": "arn"}})
    ]
    with pytest.raises(RuntimeError, match="failed to create new capacity provider: asg not found"):
        create_capacity_providers(providers)


@patch("ecs_components.compute._component.pulumi.ComponentResource")
@patch("ecs_components.compute.cluster_capacity_providers.pulumi_aws.ecs.ClusterCapacityProviders")
def test_create_cluster_capacity_providers(mock_ccp: MagicMock, mock_component: MagicMock) -> None:
    """The association is named after the cluster and carries the default strategy."""
    config = ClusterCapacityProviderConfig.from_dict(
        {
            "clusterName": "orders",
            "capacityProviders": ["FARGATE", "FARGATE_SPOT"],
            "defaultCapacityProviderStrategies": [
                {"capacityProvider": "FARGATE", "base": 1, "weight": 1},
                {"capacityProvider": "FARGATE_SPOT", "weight": 3},
            ],
        }
    )
    create_cluster_capacity_providers(config)

    mock_component.assert_called_once_with(
        f"{COMPONENT_PREFIX}:ClusterCapacityProviders", "orders", None, None
    )
    args, call_kw = mock_ccp.call_args
    assert args[0] == "orders"
    assert call_kw["cluster_name"] == "orders"
    assert call_kw["capacity_providers"] == ["FARGATE", "FARGATE_SPOT"]
    strategies = call_kw["default_capacity_provider_strategies"]
    assert [s.capacity_provider for s in strategies] == ["FARGATE", "FARGATE_SPOT"]
    assert strategies[0].base == 1
    assert strategies[1].weight == 3
    assert strategies[1].base is None


@patch("ecs_components.compute._component.pulumi.ComponentResource")
@patch("ecs_components.compute.cluster_capacity_providers.pulumi_aws.ecs.ClusterCapacityProviders")
def test_cluster_capacity_providers_empty_lists(mock_ccp: MagicMock, mock_component: MagicMock) -> None:
    create_cluster_capacity_providers(ClusterCapacityProviderConfig(cluster_name="orders"))

    call_kw = mock_ccp.call_args[1]
    assert call_kw["capacity_providers"] is None
    assert call_kw["default_capacity_provider_strategies"] is None


def test_cluster_capacity_providers_requires_plain_cluster_name() -> None:
    with pytest.raises(ValueError, match="cluster_name"):
        create_cluster_capacity_providers(ClusterCapacityProviderConfig())


@patch("ecs_components.compute._component.pulumi.ComponentResource")
@patch("ecs_components.compute.cluster_capacity_providers.pulumi_aws.ecs.ClusterCapacityProviders")
def test_cluster_capacity_providers_wraps_provider_error(mock_ccp: MagicMock, mock_component: MagicMock) -> None:
    mock_ccp.side_effect = Exception("cluster missing")
    with pytest.raises(RuntimeError, match="failed to create new cluster capacity provider: cluster missing"):
        create_cluster_capacity_providers(ClusterCapacityProviderConfig(cluster_name="orders"))
