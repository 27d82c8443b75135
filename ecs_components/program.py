"""Pulumi program body shared by the project entry point and the CLI."""

import pulumi

from ecs_components.capabilities import ProvisionContext, run_capabilities
from ecs_components.config import EcsConfig, create_aws_provider


def provision(config: EcsConfig) -> None:
    """Build the provider, run every declared section, export outputs."""
    region = pulumi.Config("aws").require("region")
    aws_provider = create_aws_provider(config.project, region)
    ctx = ProvisionContext(config=config, aws_provider=aws_provider)
    for key, value in run_capabilities(ctx).items():
        pulumi.export(key, value)
