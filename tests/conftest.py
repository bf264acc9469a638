# -*- coding: utf-8 -*-
"""
全局测试配置
提供基本的测试环境设置和共享fixture
"""

import tempfile
from pathlib import Path

import pytest

from addongate.plugins.config.base_config import GateConfig
from addongate.plugins.dependency.manifest import PluginRecord, RequirementSpec
from addongate.plugins.dependency.registry import InMemoryPluginRegistry

BD_BASE = "bulk-delete/bulk-delete.php"
ADDON_BASE = "bulk-delete-scheduler/bulk-delete-scheduler.php"


@pytest.fixture
def requirement_spec() -> RequirementSpec:
    """示例依赖需求规范"""
    return RequirementSpec(
        addon_name="Scheduler",
        required_plugin_name="Bulk Delete",
        min_plugin_version="6.0.0",
        min_runtime_version="5.6.0",
    )


@pytest.fixture
def bulk_delete_record() -> PluginRecord:
    """已激活且版本满足要求的 Bulk Delete 记录"""
    return PluginRecord(
        name="Bulk Delete", base_path=BD_BASE, version="6.0.1", is_active=True
    )


@pytest.fixture
def registry() -> InMemoryPluginRegistry:
    """包含附加组件自身和 Bulk Delete 的注册表"""
    reg = InMemoryPluginRegistry()
    reg.register_plugin(
        PluginRecord(
            name="Bulk Delete - Scheduler",
            base_path=ADDON_BASE,
            version="1.0.0",
            is_active=True,
        )
    )
    reg.register_plugin(
        PluginRecord(name="Bulk Delete", base_path=BD_BASE, version="6.0.0", is_active=True)
    )
    return reg


@pytest.fixture
def gate_config() -> GateConfig:
    """默认依赖门配置"""
    return GateConfig()


@pytest.fixture
def temp_dir():
    """临时目录"""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)
