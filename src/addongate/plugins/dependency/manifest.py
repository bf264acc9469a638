# -*- coding: utf-8 -*-
"""
插件记录与依赖需求模型

定义宿主插件注册表中的插件记录、附加组件自身的元数据以及依赖需求规范，
并提供插件清单快照的加载与保存。
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...exceptions import InventoryLoadError

DEFAULT_REQUIRED_PLUGIN_NAME = "Bulk Delete"
DEFAULT_REQUIRED_PLUGIN_SLUG = "bulk-delete"
DEFAULT_MIN_PLUGIN_VERSION = "6.0.0"
DEFAULT_MIN_RUNTIME_VERSION = "5.6.0"


def coerce_version(v: Any) -> str:
    """缺失的版本信息一律视为 "0" """
    if v is None:
        return "0"
    text = str(v).strip()
    return text or "0"


_TRUE_FLAGS = {"1", "true", "yes", "on", "y"}
_FALSE_FLAGS = {"", "0", "false", "no", "off", "n", "none", "null"}


def parse_flag(value: Any) -> bool:
    """
    解析激活标记

    清单中的标量按原始字符串读取，无法识别的值引发 InventoryLoadError。
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_FLAGS:
        return True
    if text in _FALSE_FLAGS:
        return False
    raise InventoryLoadError(f"无法识别的激活标记: {value!r}")


class PluginRecord(BaseModel):
    """
    已安装插件记录

    name 取自插件头部声明，base_path 为相对安装路径（如 "bulk-delete/bulk-delete.php"），
    用于构造激活/升级操作链接。
    """

    name: str = Field(..., description="插件头部声明的名称")
    base_path: str = Field(..., description="相对安装路径")
    version: str = Field(default="0", description="插件版本")
    is_active: bool = Field(default=False, description="是否已激活")

    model_config = ConfigDict(frozen=True)

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, v):
        return coerce_version(v)


class AddonMetadata(BaseModel):
    """附加组件自身的元数据，宿主未登记时全部为 None"""

    name: Optional[str] = None
    version: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class RequirementSpec(BaseModel):
    """
    依赖需求规范

    描述附加组件对宿主插件和运行时的最低要求。
    """

    addon_name: str = Field(..., description="附加组件的显示名称")
    required_plugin_name: str = Field(
        default=DEFAULT_REQUIRED_PLUGIN_NAME, description="被依赖插件的声明名称"
    )
    required_plugin_slug: str = Field(
        default=DEFAULT_REQUIRED_PLUGIN_SLUG, description="被依赖插件的安装标识"
    )
    min_plugin_version: str = Field(
        default=DEFAULT_MIN_PLUGIN_VERSION, description="被依赖插件的最低版本"
    )
    min_runtime_version: str = Field(
        default=DEFAULT_MIN_RUNTIME_VERSION, description="运行时的最低版本"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("min_plugin_version", "min_runtime_version", mode="before")
    @classmethod
    def validate_min_version(cls, v):
        return coerce_version(v)


class InventoryLoader:
    """
    插件清单快照加载器

    支持两种结构：
    1. 记录列表: [{"name": ..., "base_path": ..., "version": ..., "is_active": ...}]
    2. 宿主原生映射: {base_path: {"Name": ..., "Version": ..., "Active": ...}}

    两种结构都保留枚举顺序。
    """

    @staticmethod
    def parse_inventory(data: Any) -> List[PluginRecord]:
        """将已解析的数据转换为插件记录列表"""
        if data is None:
            return []

        try:
            if isinstance(data, list):
                records = []
                for item in data:
                    if not isinstance(item, dict):
                        raise InventoryLoadError(f"插件记录格式无效: {item!r}")
                    fields = dict(item)
                    fields["is_active"] = parse_flag(fields.get("is_active"))
                    records.append(PluginRecord(**fields))
                return records

            if isinstance(data, dict):
                records = []
                for base_path, header in data.items():
                    if not isinstance(header, dict):
                        raise InventoryLoadError(f"插件头部格式无效: {base_path}")
                    records.append(
                        PluginRecord(
                            name=header.get("Name", header.get("name", "")),
                            base_path=base_path,
                            version=header.get("Version", header.get("version")),
                            is_active=parse_flag(header.get("Active", header.get("active"))),
                        )
                    )
                return records

        except (TypeError, ValidationError) as e:
            raise InventoryLoadError(f"插件清单数据无效: {e}") from e

        raise InventoryLoadError(f"不支持的插件清单结构: {type(data).__name__}")

    @staticmethod
    def load_from_file(inventory_path: Path) -> List[PluginRecord]:
        """从 YAML 或 JSON 文件加载插件清单快照"""
        inventory_path = Path(inventory_path)
        if not inventory_path.exists():
            raise InventoryLoadError(f"插件清单文件不存在: {inventory_path}")

        suffix = inventory_path.suffix.lower()
        try:
            with open(inventory_path, "r", encoding="utf-8") as f:
                if suffix in (".yaml", ".yml"):
                    # BaseLoader 保留原始字符串，避免 6.10 被解析成浮点数 6.1
                    data = yaml.load(f, Loader=yaml.BaseLoader)
                elif suffix == ".json":
                    data = json.load(f, parse_float=str, parse_int=str)
                else:
                    raise InventoryLoadError(f"不支持的清单文件格式: {inventory_path.suffix}")
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise InventoryLoadError(f"加载插件清单失败 {inventory_path}: {e}") from e

        return InventoryLoader.parse_inventory(data)

    @staticmethod
    def save_to_file(
        records: Sequence[PluginRecord], inventory_path: Path, format: str = "yaml"
    ) -> None:
        """以记录列表结构保存插件清单快照"""
        inventory_path = Path(inventory_path)
        inventory_path.parent.mkdir(parents=True, exist_ok=True)

        data: List[Dict[str, Any]] = [record.model_dump() for record in records]

        if format.lower() not in ("yaml", "json"):
            raise ValueError(f"不支持的保存格式: {format}")

        with open(inventory_path, "w", encoding="utf-8") as f:
            if format.lower() == "yaml":
                yaml.dump(
                    data,
                    f,
                    default_flow_style=False,
                    allow_unicode=True,
                    indent=2,
                    sort_keys=False,
                )
            else:
                json.dump(data, f, ensure_ascii=False, indent=2)
