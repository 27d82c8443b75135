"""Tests for the Pulumi program body."""

from unittest.mock import MagicMock, patch

from ecs_components.config import EcsConfig
from ecs_components.program import provision


@patch("ecs_components.program.pulumi.export")
@patch("ecs_components.program.run_capabilities")
@patch("ecs_components.program.create_aws_provider")
@patch("ecs_components.program.pulumi.Config")
def test_provision_exports_handler_outputs(
    mock_config: MagicMock,
    mock_provider: MagicMock,
    mock_run: MagicMock,
    mock_export: MagicMock,
) -> None:
    """Provider uses project and aws:region; every collected export is published."""
    mock_config.return_value.require.return_value = "eu-west-1"
    mock_run.return_value = {"cluster_arn": "arn:cluster", "service_id": "svc"}
    config = EcsConfig.from_dict({"project": "orders", "cluster": {"name": "orders"}})

    provision(config)

    mock_config.assert_called_once_with("aws")
    mock_config.return_value.require.assert_called_once_with("region")
    mock_provider.assert_called_once_with("orders", "eu-west-1")
    ctx = mock_run.call_args[0][0]
    assert ctx.config is config
    assert ctx.aws_provider is mock_provider.return_value
    assert sorted(c[0] for c in mock_export.call_args_list) == [
        ("cluster_arn", "arn:cluster"),
        ("service_id", "svc"),
    ]
