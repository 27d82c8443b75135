"""
ECS components program: provisions every section declared in the ECS config.
Reads the config from ECS_CONFIG_PATH; the region comes from `aws:region`.
"""

from ecs_components.config import load_ecs_config
from ecs_components.program import provision

provision(load_ecs_config())
