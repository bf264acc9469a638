# -*- coding: utf-8 -*-
"""
插件记录与清单加载测试
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from addongate.exceptions import InventoryLoadError
from addongate.plugins.dependency.manifest import (
    InventoryLoader,
    PluginRecord,
    RequirementSpec,
)


class TestPluginRecord:
    """测试 PluginRecord"""

    def test_defaults(self):
        """测试默认值"""
        record = PluginRecord(name="Bulk Delete", base_path="bulk-delete/bulk-delete.php")
        assert record.version == "0"
        assert record.is_active is False

    @pytest.mark.parametrize("raw, expected", [(None, "0"), ("", "0"), ("  ", "0"), (6, "6")])
    def test_version_coercion(self, raw, expected):
        """测试缺失或非字符串版本的转换"""
        record = PluginRecord(name="x", base_path="x/x.php", version=raw)
        assert record.version == expected

    def test_frozen(self):
        """测试记录不可变"""
        record = PluginRecord(name="x", base_path="x/x.php")
        with pytest.raises(ValidationError):
            record.version = "1.0"

    def test_missing_base_path(self):
        """测试缺少必需字段"""
        with pytest.raises(ValidationError):
            PluginRecord(name="x")


class TestRequirementSpec:
    """测试 RequirementSpec"""

    def test_defaults(self):
        spec = RequirementSpec(addon_name="Scheduler")
        assert spec.required_plugin_name == "Bulk Delete"
        assert spec.required_plugin_slug == "bulk-delete"
        assert spec.min_plugin_version == "6.0.0"
        assert spec.min_runtime_version == "5.6.0"

    def test_blank_min_version_becomes_zero(self):
        spec = RequirementSpec(addon_name="Scheduler", min_plugin_version="")
        assert spec.min_plugin_version == "0"


class TestInventoryLoader:
    """测试 InventoryLoader"""

    def test_load_host_native_yaml(self, temp_dir: Path):
        """测试加载宿主原生映射结构并保留顺序"""
        path = temp_dir / "inventory.yaml"
        path.write_text(
            """
akismet/akismet.php:
  Name: Akismet
  Version: 5.3
  Active: true
bulk-delete/bulk-delete.php:
  Name: Bulk Delete
  Version: 6.0.0
""",
            encoding="utf-8",
        )

        records = InventoryLoader.load_from_file(path)
        assert [r.base_path for r in records] == [
            "akismet/akismet.php",
            "bulk-delete/bulk-delete.php",
        ]
        assert records[0].version == "5.3"
        assert records[0].is_active is True
        assert records[1].name == "Bulk Delete"
        assert records[1].is_active is False

    def test_load_list_json(self, temp_dir: Path):
        """测试加载记录列表结构"""
        path = temp_dir / "inventory.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "name": "Bulk Delete",
                        "base_path": "bulk-delete/bulk-delete.php",
                        "version": "6.1.0",
                        "is_active": True,
                    }
                ]
            ),
            encoding="utf-8",
        )

        records = InventoryLoader.load_from_file(path)
        assert len(records) == 1
        assert records[0].version == "6.1.0"
        assert records[0].is_active is True

    def test_unquoted_versions_keep_text(self, temp_dir: Path):
        """测试未加引号的版本号按原文读取，6.10 不会变成 6.1"""
        path = temp_dir / "inventory.yaml"
        path.write_text(
            "bulk-delete/bulk-delete.php:\n  Name: Bulk Delete\n  Version: 6.10\n  Active: yes\n",
            encoding="utf-8",
        )
        records = InventoryLoader.load_from_file(path)
        assert records[0].version == "6.10"
        assert records[0].is_active is True

    def test_json_numeric_version_keeps_text(self, temp_dir: Path):
        path = temp_dir / "inventory.json"
        path.write_text(
            '{"bulk-delete/bulk-delete.php": {"Name": "Bulk Delete", "Version": 6.10, "Active": 1}}',
            encoding="utf-8",
        )
        records = InventoryLoader.load_from_file(path)
        assert records[0].version == "6.10"
        assert records[0].is_active is True

    def test_unrecognised_active_flag(self, temp_dir: Path):
        path = temp_dir / "inventory.yaml"
        path.write_text(
            "bulk-delete/bulk-delete.php:\n  Name: Bulk Delete\n  Active: maybe\n",
            encoding="utf-8",
        )
        with pytest.raises(InventoryLoadError):
            InventoryLoader.load_from_file(path)

    @pytest.mark.parametrize("flag, expected", [("true", True), ("off", False), (None, False)])
    def test_list_shape_string_flags(self, flag, expected):
        """测试列表结构中字符串形式的激活标记"""
        records = InventoryLoader.parse_inventory(
            [{"name": "Bulk Delete", "base_path": "bulk-delete/bulk-delete.php", "is_active": flag}]
        )
        assert records[0].is_active is expected

    def test_empty_file(self, temp_dir: Path):
        path = temp_dir / "inventory.yaml"
        path.write_text("", encoding="utf-8")
        assert InventoryLoader.load_from_file(path) == []

    def test_missing_file(self, temp_dir: Path):
        with pytest.raises(InventoryLoadError):
            InventoryLoader.load_from_file(temp_dir / "nope.yaml")

    def test_unsupported_suffix(self, temp_dir: Path):
        path = temp_dir / "inventory.txt"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(InventoryLoadError):
            InventoryLoader.load_from_file(path)

    def test_malformed_yaml(self, temp_dir: Path):
        path = temp_dir / "inventory.yaml"
        path.write_text("a: [unclosed", encoding="utf-8")
        with pytest.raises(InventoryLoadError):
            InventoryLoader.load_from_file(path)

    def test_invalid_structure(self):
        """测试无效的数据结构"""
        with pytest.raises(InventoryLoadError):
            InventoryLoader.parse_inventory("just a string")
        with pytest.raises(InventoryLoadError):
            InventoryLoader.parse_inventory({"bulk-delete/bulk-delete.php": "Bulk Delete"})
        with pytest.raises(InventoryLoadError):
            InventoryLoader.parse_inventory([{"name": "no base path"}])

    @pytest.mark.parametrize("fmt, filename", [("yaml", "out.yaml"), ("json", "out.json")])
    def test_save_and_reload(self, temp_dir: Path, bulk_delete_record, fmt, filename):
        """测试保存后可重新加载"""
        path = temp_dir / "nested" / filename
        InventoryLoader.save_to_file([bulk_delete_record], path, format=fmt)
        assert InventoryLoader.load_from_file(path) == [bulk_delete_record]

    def test_save_unsupported_format(self, temp_dir: Path, bulk_delete_record):
        with pytest.raises(ValueError):
            InventoryLoader.save_to_file([bulk_delete_record], temp_dir / "x.xml", format="xml")
