"""Provisioning context: config, provider, outputs, dependencies and Pulumi exports."""

from dataclasses import dataclass, field
from typing import Any

import pulumi
import pulumi_aws

from ecs_components.config import EcsConfig


@dataclass
class ProvisionContext:
    """Context passed to section handlers: config, provider, and key-value outputs/exports."""

    config: EcsConfig
    aws_provider: pulumi_aws.Provider | None = None
    _outputs: dict[str, Any] = field(default_factory=dict)
    _exports: dict[str, Any] = field(default_factory=dict)
    _completed: list[pulumi.Resource] = field(default_factory=list)
    _pending: list[pulumi.Resource] = field(default_factory=list)

    def set(self, key: str, value: Any) -> None:
        """Store a value for later use by other sections."""
        self._outputs[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a value; return default if key is missing."""
        return self._outputs.get(key, default)

    def require(self, key: str) -> Any:
        """Retrieve a value; raise RuntimeError with available keys if missing."""
        if key not in self._outputs:
            available = ", ".join(sorted(self._outputs.keys())) or "(none)"
            raise RuntimeError(
                f"missing required key: {key!r}. Available keys: {available}"
            )
        return self._outputs[key]

    def export(self, key: str, value: Any) -> None:
        """Register a Pulumi stack export."""
        self._exports[key] = value

    @property
    def exports(self) -> dict[str, Any]:
        """Return all registered Pulumi exports."""
        return dict(self._exports)

    def add_resources(self, *resources: pulumi.Resource) -> None:
        """Record resources created in the current phase."""
        self._pending.extend(resources)

    def finish_phase(self) -> None:
        """Make resources of the finished phase dependencies of every later phase."""
        self._completed.extend(self._pending)
        self._pending = []

    def resource_options(self) -> pulumi.ResourceOptions:
        """Options for a component: the AWS provider plus earlier-phase dependencies."""
        return pulumi.ResourceOptions(
            provider=self.aws_provider,
            depends_on=list(self._completed) or None,
        )
