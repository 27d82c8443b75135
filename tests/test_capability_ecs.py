"""Tests for the ECS section handlers (reference fallbacks, context outputs, exports)."""

from unittest.mock import MagicMock, patch

import pytest

from ecs_components.capabilities import ProvisionContext
from ecs_components.capabilities.registry import SECTIONS
from ecs_components.config import EcsConfig


def _ctx(document: dict) -> ProvisionContext:
    return ProvisionContext(config=EcsConfig.from_dict(document), aws_provider=MagicMock())


def _run(section: str, ctx: ProvisionContext) -> None:
    SECTIONS[section].handler(ctx.config.sections[section], ctx)


@patch("ecs_components.capabilities.ecs.create_account_settings_default")
def test_account_settings_handler(mock_create: MagicMock) -> None:
    setting = MagicMock()
    mock_create.return_value = [setting]
    ctx = _ctx({"accountSettingsDefault": [{"name": "containerInsights", "value": "enabled"}]})

    _run("accountSettingsDefault", ctx)

    settings_arg, opts = mock_create.call_args[0]
    assert settings_arg[0].name == "containerInsights"
    assert opts.provider is ctx.aws_provider
    assert ctx.exports["account_setting_default_ids"] == [setting.id]


@patch("ecs_components.capabilities.ecs.create_capacity_providers")
def test_capacity_providers_handler(mock_create: MagicMock) -> None:
    provider = MagicMock()
    mock_create.return_value = [provider]
    ctx = _ctx(
        {"capacityProviders": [{"name": "cp", "autoscalingGroupProvider": {"autoscalingGroupArn": "arn"}}]}
    )

    _run("capacityProviders", ctx)

    assert ctx.get("capacity_providers.names") == ["cp"]
    assert ctx.exports["capacity_provider_arns"] == [provider.arn]


@patch("ecs_components.capabilities.ecs.create_cluster")
def test_cluster_handler_sets_name_and_arn(mock_create: MagicMock) -> None:
    ctx = _ctx({"cluster": {"name": "orders"}})

    _run("cluster", ctx)

    outputs = mock_create.return_value
    assert ctx.require("cluster.name") == "orders"
    assert ctx.require("cluster.arn") is outputs.cluster_arn
    assert ctx.exports["cluster_arn"] is outputs.cluster_arn
    assert ctx.exports["cluster_id"] is outputs.id


@patch("ecs_components.capabilities.ecs.create_cluster_capacity_providers")
def test_cluster_capacity_provider_falls_back_to_cluster_name(mock_create: MagicMock) -> None:
    ctx = _ctx({"clusterCapacityProvider": {"capacityProviders": ["FARGATE"]}})
    ctx.set("cluster.name", "orders")

    _run("clusterCapacityProvider", ctx)

    config = mock_create.call_args[0][0]
    assert config.cluster_name == "orders"
    assert config.capacity_providers == ["FARGATE"]


@patch("ecs_components.capabilities.ecs.create_cluster_capacity_providers")
def test_cluster_capacity_provider_keeps_configured_name(mock_create: MagicMock) -> None:
    ctx = _ctx({"clusterCapacityProvider": {"clusterName": "existing"}})
    ctx.set("cluster.name", "orders")

    _run("clusterCapacityProvider", ctx)

    assert mock_create.call_args[0][0].cluster_name == "existing"


@patch("ecs_components.capabilities.ecs.create_cluster_capacity_providers")
def test_cluster_capacity_provider_defaults_to_created_providers(mock_create: MagicMock) -> None:
    """Without capacityProviders, the providers from the capacityProviders section are attached."""
    ctx = _ctx({"clusterCapacityProvider": {"clusterName": "orders"}})
    ctx.set("capacity_providers.names", ["ec2-on-demand", "ec2-spot"])

    _run("clusterCapacityProvider", ctx)

    assert mock_create.call_args[0][0].capacity_providers == ["ec2-on-demand", "ec2-spot"]


@patch("ecs_components.capabilities.ecs.create_cluster_capacity_providers")
def test_cluster_capacity_provider_configured_list_wins(mock_create: MagicMock) -> None:
    ctx = _ctx({"clusterCapacityProvider": {"clusterName": "orders", "capacityProviders": ["FARGATE"]}})
    ctx.set("capacity_providers.names", ["ec2-on-demand"])

    _run("clusterCapacityProvider", ctx)

    assert mock_create.call_args[0][0].capacity_providers == ["FARGATE"]


def test_cluster_capacity_provider_without_cluster_raises() -> None:
    ctx = _ctx({"clusterCapacityProvider": {"capacityProviders": ["FARGATE"]}})
    with pytest.raises(RuntimeError, match="cluster.name"):
        _run("clusterCapacityProvider", ctx)


@patch("ecs_components.capabilities.ecs.create_task_definition")
def test_task_definition_handler(mock_create: MagicMock) -> None:
    ctx = _ctx({"taskDefinition": {"name": "td", "containerDefinitions": [{"name": "app"}]}})

    _run("taskDefinition", ctx)

    assert ctx.get("task_definition.arn") is mock_create.return_value.arn
    assert ctx.exports["task_definition_arn"] is mock_create.return_value.arn


@patch("ecs_components.capabilities.ecs.create_service")
def test_service_handler_falls_back_to_context(mock_create: MagicMock) -> None:
    """clusterArn and taskDefinition come from earlier sections when omitted."""
    ctx = _ctx({"service": {"name": "api"}})
    cluster_arn = MagicMock()
    task_definition_arn = MagicMock()
    ctx.set("cluster.arn", cluster_arn)
    ctx.set("task_definition.arn", task_definition_arn)

    _run("service", ctx)

    config = mock_create.call_args[0][0]
    assert config.cluster_arn is cluster_arn
    assert config.task_definition is task_definition_arn
    assert ctx.get("service.id") is mock_create.return_value.id
    assert ctx.exports["service_id"] is mock_create.return_value.id


@patch("ecs_components.capabilities.ecs.create_service")
def test_service_handler_keeps_configured_references(mock_create: MagicMock) -> None:
    ctx = _ctx({"service": {"name": "api", "clusterArn": "arn:cluster", "taskDefinition": "arn:td"}})
    ctx.set("cluster.arn", MagicMock())
    ctx.set("task_definition.arn", MagicMock())

    _run("service", ctx)

    config = mock_create.call_args[0][0]
    assert config.cluster_arn == "arn:cluster"
    assert config.task_definition == "arn:td"


@patch("ecs_components.capabilities.ecs.create_service")
def test_service_handler_task_definition_is_optional(mock_create: MagicMock) -> None:
    """A service without any task definition is left for the provider to reject or accept."""
    ctx = _ctx({"service": {"name": "api", "clusterArn": "arn:cluster"}})

    _run("service", ctx)

    assert mock_create.call_args[0][0].task_definition is None


def test_service_handler_without_cluster_raises() -> None:
    ctx = _ctx({"service": {"name": "api"}})
    with pytest.raises(RuntimeError, match="cluster.arn"):
        _run("service", ctx)


@patch("ecs_components.capabilities.ecs.create_task_sets")
def test_task_sets_handler_fills_references(mock_create: MagicMock) -> None:
    """Omitted references are filled per task set; configured ones are kept."""
    task_set_output = MagicMock()
    mock_create.return_value = [task_set_output, MagicMock()]
    ctx = _ctx(
        {
            "taskSets": [
                {"name": "blue"},
                {"name": "green", "taskDefinition": "arn:td:2", "cluster": "arn:other"},
            ]
        }
    )
    ctx.set("cluster.arn", "arn:cluster")
    ctx.set("service.id", "arn:service")
    ctx.set("task_definition.arn", "arn:td:1")

    _run("taskSets", ctx)

    blue, green = mock_create.call_args[0][0]
    assert (blue.cluster, blue.service, blue.task_definition) == ("arn:cluster", "arn:service", "arn:td:1")
    assert (green.cluster, green.service, green.task_definition) == ("arn:other", "arn:service", "arn:td:2")
    assert ctx.exports["task_set_arns"][0] is task_set_output.arn


def test_task_sets_handler_without_service_raises() -> None:
    ctx = _ctx({"taskSets": [{"name": "blue", "cluster": "arn:cluster", "taskDefinition": "arn:td"}]})
    with pytest.raises(RuntimeError, match="service.id"):
        _run("taskSets", ctx)
