"""Skill generation configuration."""

from skillport.config.loader import load_config, load_skill_config
from skillport.config.schema import (
    CategoryConfig,
    InterfaceConfig,
    RewriteConfig,
    RuntimeAssetsConfig,
    SkillConfig,
    default_categories,
)

__all__ = [
    "CategoryConfig",
    "InterfaceConfig",
    "RewriteConfig",
    "RuntimeAssetsConfig",
    "SkillConfig",
    "default_categories",
    "load_config",
    "load_skill_config",
]
