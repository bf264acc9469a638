# -*- coding: utf-8 -*-
"""
插件依赖检查系统

提供插件记录、宿主注册表、版本比较和依赖需求解析等功能。
"""

from .manifest import AddonMetadata, InventoryLoader, PluginRecord, RequirementSpec
from .registry import HostPluginRegistry, InMemoryPluginRegistry
from .resolver import (
    DependencyMissing,
    DependencyOutdated,
    RequirementResolver,
    ResolutionOutcome,
    RuntimeTooOld,
    Satisfied,
)
from .versioning import compare_versions, parse_version

__all__ = [
    "PluginRecord",
    "AddonMetadata",
    "RequirementSpec",
    "InventoryLoader",
    "HostPluginRegistry",
    "InMemoryPluginRegistry",
    "RequirementResolver",
    "ResolutionOutcome",
    "Satisfied",
    "RuntimeTooOld",
    "DependencyMissing",
    "DependencyOutdated",
    "compare_versions",
    "parse_version",
]
