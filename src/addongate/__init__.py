# -*- coding: utf-8 -*-
"""
addongate: 附加组件依赖门

在附加组件激活前检查宿主插件与运行时版本要求。
"""

__author__ = "addongate"
__version__ = "1.0.0"

# 核心组件
from .core.activator import AddonActivator
from .core.notices import Notice, NoticeBoard, Remediation, RemediationAction

# 异常
from .exceptions import (
    AddonGateException,
    GateConfigurationError,
    InventoryLoadError,
    PluginNotFoundError,
    RegistryError,
)

# 配置
from .plugins.config.base_config import GateConfig

# 依赖检查
from .plugins.dependency.manifest import AddonMetadata, PluginRecord, RequirementSpec
from .plugins.dependency.registry import HostPluginRegistry, InMemoryPluginRegistry
from .plugins.dependency.resolver import (
    DependencyMissing,
    DependencyOutdated,
    RequirementResolver,
    ResolutionOutcome,
    RuntimeTooOld,
    Satisfied,
)

__all__ = [
    # 核心组件
    "AddonActivator",
    "Notice",
    "NoticeBoard",
    "Remediation",
    "RemediationAction",
    # 配置
    "GateConfig",
    # 依赖检查
    "PluginRecord",
    "AddonMetadata",
    "RequirementSpec",
    "HostPluginRegistry",
    "InMemoryPluginRegistry",
    "RequirementResolver",
    "ResolutionOutcome",
    "Satisfied",
    "RuntimeTooOld",
    "DependencyMissing",
    "DependencyOutdated",
    # 异常
    "AddonGateException",
    "RegistryError",
    "PluginNotFoundError",
    "InventoryLoadError",
    "GateConfigurationError",
]
