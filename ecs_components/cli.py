"""
ecs-components CLI: setup, validate, preview, up, destroy.
Run `ecs-components setup` once; then point the other commands at an ECS config file.
"""

from importlib.metadata import version
import os
from pathlib import Path
import subprocess
import sys
from typing import Any

import jsonschema
from pulumi import automation as auto
import yaml

from ecs_components.config import EcsConfig
from ecs_components.program import provision

CONFIG_DIR = ".ecs-components"
CONFIG_FILENAME = "config.yaml"
DEFAULT_STACK_PREFIX = "dev"


def _config_path() -> Path:
    return Path.cwd() / CONFIG_DIR / CONFIG_FILENAME


def _load_config() -> dict[str, Any] | None:
    path = _config_path()
    if not path.exists():
        return None
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else None


def _save_config(backend_url: str, region: str, stack_prefix: str = DEFAULT_STACK_PREFIX) -> None:
    path = _config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            {
                "backend_url": backend_url,
                "region": region,
                "stack_prefix": stack_prefix,
            },
            f,
            default_flow_style=False,
        )
    print(f"Configuration saved to {path}")


def _resolve_settings(region_override: str | None) -> dict[str, Any]:
    """Merge saved settings with environment and flags; region is mandatory."""
    settings = _load_config() or {}
    region = region_override or settings.get("region") or os.environ.get("AWS_REGION")
    if not region:
        print("Region missing. Run: ecs-components setup (or pass --region)", file=sys.stderr)
        sys.exit(1)
    return {
        "backend_url": settings.get("backend_url") or os.environ.get("PULUMI_BACKEND_URL"),
        "region": region,
        "stack_prefix": settings.get("stack_prefix", DEFAULT_STACK_PREFIX),
    }


def _check_aws_credentials() -> bool:
    try:
        subprocess.run(
            ["aws", "sts", "get-caller-identity"],
            capture_output=True,
            check=True,
            timeout=10,
        )
        return True
    except (subprocess.CalledProcessError, FileNotFoundError, subprocess.TimeoutExpired):
        return False


def _stack_name(project: str, settings: dict[str, Any]) -> str:
    return f"{settings['stack_prefix']}.{project}.{settings['region']}"


def aws_plugin_version() -> str:
    return f"v{version('pulumi-aws')}"


def _select_stack(ecs_config: EcsConfig, settings: dict[str, Any], stack_name: str | None) -> auto.Stack:
    """Create or select the stack for an inline program built from the config."""
    env_vars = {}
    if settings["backend_url"]:
        env_vars["PULUMI_BACKEND_URL"] = settings["backend_url"]
    name = stack_name or _stack_name(ecs_config.project, settings)
    stack = auto.create_or_select_stack(
        stack_name=name,
        project_name=ecs_config.project,
        program=lambda: provision(ecs_config),
        opts=auto.LocalWorkspaceOptions(env_vars=env_vars),
    )
    print(f"Created/Selected stack: {name}")
    # Inline programs manage their own plugins.
    stack.workspace.install_plugin("aws", aws_plugin_version())
    stack.set_config("aws:region", auto.ConfigValue(value=settings["region"]))
    return stack


# --- setup ---


def _cmd_setup() -> None:
    print("First-time setup. You will need:")
    print("  1) AWS credentials (e.g. run: aws sso login)")
    print("  2) Backend URL for infrastructure state (e.g. s3://your-pulumi-state)")
    print("  3) Default AWS region (e.g. us-west-2)")
    print()

    if not _check_aws_credentials():
        print("AWS credentials not found. Log in (e.g. aws sso login) and try again.", file=sys.stderr)
        sys.exit(1)
    print("AWS credentials OK.")

    backend_url = os.environ.get("ECS_COMPONENTS_BACKEND_URL", "").strip()
    if not backend_url:
        backend_url = input("Backend URL for infrastructure state: ").strip()
    if not backend_url:
        print("Backend URL is required.", file=sys.stderr)
        sys.exit(1)

    region = os.environ.get("ECS_COMPONENTS_REGION", "").strip()
    if not region:
        region = input("Default AWS region (e.g. us-west-2): ").strip()
    if not region:
        print("Region is required.", file=sys.stderr)
        sys.exit(1)

    stack_prefix = (
        os.environ.get("ECS_COMPONENTS_STACK_PREFIX", DEFAULT_STACK_PREFIX).strip()
        or DEFAULT_STACK_PREFIX
    )
    _save_config(backend_url, region, stack_prefix)
    print("Setup complete. You can now use: ecs-components validate|preview|up|destroy <config>")


# --- validate ---


def _cmd_validate(config_path: str) -> None:
    ecs_config = EcsConfig.from_file(config_path)
    sections = ", ".join(ecs_config.sections) or "(none)"
    print(f"{config_path} is valid. Sections: {sections}")


# --- preview / up / destroy ---


def _cmd_preview(config_path: str, region: str | None, stack_name: str | None, refresh: bool) -> None:
    ecs_config = EcsConfig.from_file(config_path)
    stack = _select_stack(ecs_config, _resolve_settings(region), stack_name)
    if refresh:
        stack.refresh(on_output=print)
    stack.preview(on_output=print)


def _cmd_up(config_path: str, region: str | None, stack_name: str | None, refresh: bool) -> None:
    ecs_config = EcsConfig.from_file(config_path)
    stack = _select_stack(ecs_config, _resolve_settings(region), stack_name)
    if refresh:
        print("Starting refresh")
        stack.refresh(on_output=print)
        print("Refresh succeeded!")
    print("Starting update")
    result = stack.up(on_output=print)
    print("Update succeeded!")
    for key, output in result.outputs.items():
        print(f"  {key}: {output.value}")


def _cmd_destroy(
    config_path: str,
    region: str | None,
    stack_name: str | None,
    refresh: bool,
    assume_yes: bool,
) -> None:
    ecs_config = EcsConfig.from_file(config_path)
    stack = _select_stack(ecs_config, _resolve_settings(region), stack_name)
    if refresh:
        stack.refresh(on_output=print)
    if not assume_yes:
        confirm = input(f"This will remove all resources in stack '{stack.name}'. Continue? [y/N]: ")
        if confirm.strip().lower() != "y":
            print("Cancelled.")
            sys.exit(0)
    print("Destroying resources!")
    stack.destroy(on_output=print)
    print("Destroy succeeded!")


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(
        description="Provision AWS ECS resources from a JSON/YAML config. Run 'ecs-components setup' first."
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("setup", help="One-time setup: AWS, state backend, region")
    validate_p = sub.add_parser("validate", help="Check a config file against the schema")
    validate_p.add_argument("config", help="Path to the ECS config (JSON or YAML)")
    for command, help_text in (
        ("preview", "Show the changes a config would make"),
        ("up", "Create or update the resources declared in a config"),
        ("destroy", "Remove every resource in the config's stack"),
    ):
        p = sub.add_parser(command, help=help_text)
        p.add_argument("config", help="Path to the ECS config (JSON or YAML)")
        p.add_argument("--region", help="AWS region (defaults to the saved setup region)")
        p.add_argument("--stack", help="Stack name (defaults to <prefix>.<project>.<region>)")
        p.add_argument("--refresh", action="store_true", help="Refresh state before running")
        if command == "destroy":
            p.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    args = parser.parse_args()

    try:
        if args.command == "setup":
            _cmd_setup()
        elif args.command == "validate":
            _cmd_validate(args.config)
        elif args.command == "preview":
            _cmd_preview(args.config, args.region, args.stack, args.refresh)
        elif args.command == "up":
            _cmd_up(args.config, args.region, args.stack, args.refresh)
        elif args.command == "destroy":
            _cmd_destroy(args.config, args.region, args.stack, args.refresh, args.yes)
        else:
            parser.print_help()
            sys.exit(1)
    except (auto.CommandError, jsonschema.ValidationError) as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
