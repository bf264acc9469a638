# -*- coding: utf-8 -*-
"""
宿主插件注册表

定义依赖门查询宿主环境所用的注册表接口，并提供一个内存实现，
用于命令行检查和测试。
"""

import abc
import logging
import posixpath
from pathlib import Path
from typing import Dict, List, Optional

from ...exceptions import PluginNotFoundError
from .manifest import AddonMetadata, InventoryLoader, PluginRecord


def addon_registry_key(addon_file_path: str) -> str:
    """
    根据附加组件主文件路径计算其在宿主注册表中的键

    宿主以 "<插件目录>/<主文件名>" 作为键，插件目录取文件所在目录的最后一个非空段。
    """
    normalized = str(addon_file_path).replace("\\", "/")
    directory, filename = posixpath.split(normalized)
    segments = [segment for segment in directory.split("/") if segment]
    if not segments:
        return filename
    return f"{segments[-1]}/{filename}"


class HostPluginRegistry(abc.ABC):
    """宿主插件注册表接口"""

    @abc.abstractmethod
    def list_installed_plugins(self) -> List[PluginRecord]:
        """按宿主枚举顺序列出已安装插件"""

    @abc.abstractmethod
    def is_plugin_active(self, base_path: str) -> bool:
        """查询指定基础路径的插件是否已激活"""

    @abc.abstractmethod
    def get_own_metadata(self, addon_file_path: str) -> AddonMetadata:
        """读取附加组件自身的元数据"""


class InMemoryPluginRegistry(HostPluginRegistry):
    """
    内存插件注册表

    以基础路径为键保存插件记录，激活状态单独维护，枚举顺序即注册顺序。
    """

    def __init__(self):
        """初始化插件注册表"""
        self.logger = logging.getLogger(__name__)

        self._records: Dict[str, PluginRecord] = {}
        self._active: Dict[str, bool] = {}

        self.logger.debug("内存插件注册表已初始化")

    def register_plugin(self, record: PluginRecord) -> None:
        """
        注册插件

        同一基础路径重复注册时替换旧记录（保留原有枚举位置）。

        Args:
            record: 插件记录
        """
        existing = self._records.get(record.base_path)
        if existing is not None:
            self.logger.warning(
                f"插件 {record.base_path} 已存在 (版本: {existing.version}), "
                f"将被替换为新版本 {record.version}"
            )

        self._records[record.base_path] = record
        self._active[record.base_path] = record.is_active
        self.logger.info(f"插件 {record.name} v{record.version} 注册成功 ({record.base_path})")

    def register_from_file(self, inventory_path: Path) -> int:
        """
        从插件清单快照文件注册插件

        Args:
            inventory_path: YAML 或 JSON 清单文件

        Returns:
            注册的插件数量

        Raises:
            InventoryLoadError: 清单文件无法加载
        """
        records = InventoryLoader.load_from_file(inventory_path)
        for record in records:
            self.register_plugin(record)

        self.logger.info(f"从 {inventory_path} 注册了 {len(records)} 个插件")
        return len(records)

    def unregister_plugin(self, base_path: str) -> bool:
        """
        注销插件

        Returns:
            注销是否成功
        """
        if base_path not in self._records:
            self.logger.warning(f"尝试注销不存在的插件: {base_path}")
            return False

        del self._records[base_path]
        self._active.pop(base_path, None)
        self.logger.info(f"插件 {base_path} 注销成功")
        return True

    def activate_plugin(self, base_path: str) -> None:
        """激活插件"""
        self._set_active(base_path, True)

    def deactivate_plugin(self, base_path: str) -> None:
        """停用插件"""
        self._set_active(base_path, False)

    def has_plugin(self, base_path: str) -> bool:
        """检查插件是否已安装"""
        return base_path in self._records

    def get_plugin(self, base_path: str) -> Optional[PluginRecord]:
        """获取插件记录，激活状态为当前值"""
        record = self._records.get(base_path)
        if record is None:
            return None
        return record.model_copy(update={"is_active": self._active[base_path]})

    def list_installed_plugins(self) -> List[PluginRecord]:
        return [self.get_plugin(base_path) for base_path in self._records]

    def is_plugin_active(self, base_path: str) -> bool:
        # 未安装的插件不可能处于激活状态
        return self._active.get(base_path, False)

    def get_own_metadata(self, addon_file_path: str) -> AddonMetadata:
        """按宿主的键规则查找附加组件自身的记录"""
        record = self._records.get(addon_registry_key(addon_file_path))
        if record is None:
            return AddonMetadata()
        return AddonMetadata(name=record.name, version=record.version)

    def clear(self) -> None:
        """清空注册表"""
        self._records.clear()
        self._active.clear()
        self.logger.info("注册表已清空")

    def _set_active(self, base_path: str, active: bool) -> None:
        if base_path not in self._records:
            raise PluginNotFoundError(f"插件不存在: {base_path}")
        self._active[base_path] = active
        self.logger.info(f"插件 {base_path} 已{'激活' if active else '停用'}")

    def __len__(self) -> int:
        return len(self._records)
