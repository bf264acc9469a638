# -*- coding: utf-8 -*-
"""
宿主插件注册表测试
"""

from pathlib import Path

import pytest

from addongate.exceptions import InventoryLoadError, PluginNotFoundError
from addongate.plugins.dependency.manifest import AddonMetadata, PluginRecord
from addongate.plugins.dependency.registry import (
    HostPluginRegistry,
    InMemoryPluginRegistry,
    addon_registry_key,
)


class TestAddonRegistryKey:
    """测试附加组件注册表键的计算"""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/srv/wp/plugins/bd-scheduler/bd-scheduler.php", "bd-scheduler/bd-scheduler.php"),
            ("plugins//bd-scheduler//bd-scheduler.php", "bd-scheduler/bd-scheduler.php"),
            ("C:\\wp\\plugins\\bd-scheduler\\main.php", "bd-scheduler/main.php"),
            ("main.php", "main.php"),
        ],
    )
    def test_key(self, path, expected):
        assert addon_registry_key(path) == expected


class TestInMemoryPluginRegistry:
    """测试 InMemoryPluginRegistry"""

    def test_is_host_registry(self):
        assert isinstance(InMemoryPluginRegistry(), HostPluginRegistry)

    def test_register_and_list_in_order(self):
        """测试注册顺序即枚举顺序"""
        registry = InMemoryPluginRegistry()
        registry.register_plugin(PluginRecord(name="B", base_path="b/b.php"))
        registry.register_plugin(PluginRecord(name="A", base_path="a/a.php"))

        assert [r.name for r in registry.list_installed_plugins()] == ["B", "A"]
        assert len(registry) == 2
        assert registry.has_plugin("a/a.php")

    def test_reregister_replaces(self, caplog):
        """测试重复注册同一基础路径时替换记录"""
        registry = InMemoryPluginRegistry()
        registry.register_plugin(PluginRecord(name="A", base_path="a/a.php", version="1.0"))
        registry.register_plugin(PluginRecord(name="B", base_path="b/b.php"))
        with caplog.at_level("WARNING", logger="addongate.plugins.dependency.registry"):
            registry.register_plugin(
                PluginRecord(name="A", base_path="a/a.php", version="2.0")
            )

        assert "已存在" in caplog.text
        plugins = registry.list_installed_plugins()
        assert [p.base_path for p in plugins] == ["a/a.php", "b/b.php"]
        assert plugins[0].version == "2.0"

    def test_activation(self):
        """测试激活与停用"""
        registry = InMemoryPluginRegistry()
        registry.register_plugin(PluginRecord(name="A", base_path="a/a.php"))
        assert not registry.is_plugin_active("a/a.php")

        registry.activate_plugin("a/a.php")
        assert registry.is_plugin_active("a/a.php")
        assert registry.get_plugin("a/a.php").is_active is True
        assert registry.list_installed_plugins()[0].is_active is True

        registry.deactivate_plugin("a/a.php")
        assert not registry.is_plugin_active("a/a.php")

    def test_activate_unknown_plugin(self):
        registry = InMemoryPluginRegistry()
        with pytest.raises(PluginNotFoundError):
            registry.activate_plugin("missing/missing.php")

    def test_unknown_plugin_is_inactive(self):
        assert InMemoryPluginRegistry().is_plugin_active("missing/missing.php") is False

    def test_unregister(self):
        registry = InMemoryPluginRegistry()
        registry.register_plugin(PluginRecord(name="A", base_path="a/a.php", is_active=True))
        assert registry.unregister_plugin("a/a.php")
        assert not registry.has_plugin("a/a.php")
        assert not registry.is_plugin_active("a/a.php")
        assert not registry.unregister_plugin("a/a.php")

    def test_get_own_metadata(self, registry):
        """测试按宿主键规则读取自身元数据"""
        metadata = registry.get_own_metadata(
            "/var/www/plugins/bulk-delete-scheduler/bulk-delete-scheduler.php"
        )
        assert metadata == AddonMetadata(name="Bulk Delete - Scheduler", version="1.0.0")

    def test_get_own_metadata_unknown(self, registry):
        metadata = registry.get_own_metadata("/var/www/plugins/other/other.php")
        assert metadata.name is None
        assert metadata.version is None

    def test_register_from_file(self, temp_dir: Path):
        """测试从快照文件注册"""
        path = temp_dir / "inventory.yaml"
        path.write_text(
            "bulk-delete/bulk-delete.php:\n  Name: Bulk Delete\n  Version: 6.0.0\n  Active: true\n",
            encoding="utf-8",
        )
        registry = InMemoryPluginRegistry()
        assert registry.register_from_file(path) == 1
        assert registry.is_plugin_active("bulk-delete/bulk-delete.php")

    def test_register_from_missing_file(self, temp_dir: Path):
        with pytest.raises(InventoryLoadError):
            InMemoryPluginRegistry().register_from_file(temp_dir / "missing.yaml")

    def test_clear(self, registry):
        registry.clear()
        assert len(registry) == 0
        assert registry.list_installed_plugins() == []
