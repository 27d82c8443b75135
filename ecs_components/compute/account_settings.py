"""ECS account setting defaults."""

import pulumi
import pulumi_aws

from ecs_components.compute._component import child_opts, new_component
from ecs_components.config import AccountSettingDefaultConfig


def create_account_settings_default(
    settings: list[AccountSettingDefaultConfig],
    opts: pulumi.ResourceOptions | None = None,
) -> list[pulumi_aws.ecs.AccountSettingDefault]:
    """Create one account setting default per entry, each under its own component."""
    created: list[pulumi_aws.ecs.AccountSettingDefault] = []
    for setting in settings:
        component = new_component("AccountSettingDefault", setting.name, opts)
        pulumi.log.debug(f"Creating ECS account setting default '{setting.name}'")
        try:
            resource = pulumi_aws.ecs.AccountSettingDefault(
                setting.name,
                name=setting.name,
                value=setting.value,
                opts=child_opts(component),
            )
        except Exception as e:
            raise RuntimeError(f"failed to create new default account setting: {e}") from e
        component.register_outputs({"id": resource.id})
        created.append(resource)
    return created
