# -*- coding: utf-8 -*-
"""
依赖需求解析引擎

根据运行时版本和已安装插件清单判断附加组件的依赖是否满足。
纯函数，无副作用；任何输入组合都恰好对应一种结果。
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .manifest import PluginRecord, RequirementSpec
from .versioning import version_lt


@dataclass(frozen=True)
class ResolutionOutcome:
    """依赖检查结果基类"""

    @property
    def satisfied(self) -> bool:
        return False


@dataclass(frozen=True)
class Satisfied(ResolutionOutcome):
    """所有需求均已满足"""

    @property
    def satisfied(self) -> bool:
        return True


@dataclass(frozen=True)
class RuntimeTooOld(ResolutionOutcome):
    """运行时版本过低"""

    runtime_version: str
    min_runtime_version: str


@dataclass(frozen=True)
class DependencyMissing(ResolutionOutcome):
    """
    被依赖插件缺失

    installed_but_inactive 为 True 时插件已安装但未激活，base_path 指向该插件；
    仍视为未满足，只影响提示中给出"激活"还是"安装"操作。
    """

    installed_but_inactive: bool = False
    base_path: Optional[str] = None


@dataclass(frozen=True)
class DependencyOutdated(ResolutionOutcome):
    """被依赖插件版本过低"""

    installed_version: str
    base_path: Optional[str] = None


def find_dependency(
    plugin_name: str, inventory: Iterable[PluginRecord]
) -> Optional[PluginRecord]:
    """按枚举顺序返回第一个名称完全匹配的插件记录（区分大小写，不做规范化）"""
    for record in inventory:
        if record.name == plugin_name:
            return record
    return None


class RequirementResolver:
    """
    依赖需求解析器

    检查顺序固定，第一个未通过的检查即为结果：
    1. 运行时版本
    2. 被依赖插件是否安装且已激活
    3. 被依赖插件版本
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def resolve(
        self,
        spec: RequirementSpec,
        runtime_version: str,
        inventory: Iterable[PluginRecord],
    ) -> ResolutionOutcome:
        """
        解析依赖需求

        Args:
            spec: 依赖需求规范
            runtime_version: 当前运行时版本
            inventory: 已安装插件清单快照

        Returns:
            检查结果
        """
        if version_lt(runtime_version, spec.min_runtime_version):
            self.logger.debug(
                f"运行时版本 {runtime_version} 低于要求的 {spec.min_runtime_version}"
            )
            return RuntimeTooOld(
                runtime_version=str(runtime_version),
                min_runtime_version=spec.min_runtime_version,
            )

        record = find_dependency(spec.required_plugin_name, inventory)
        if record is None:
            self.logger.debug(f"未找到被依赖插件: {spec.required_plugin_name}")
            return DependencyMissing(installed_but_inactive=False)

        if not record.is_active:
            self.logger.debug(f"被依赖插件已安装但未激活: {record.base_path}")
            return DependencyMissing(installed_but_inactive=True, base_path=record.base_path)

        if version_lt(record.version, spec.min_plugin_version):
            self.logger.debug(
                f"被依赖插件版本 {record.version} 低于要求的 {spec.min_plugin_version}"
            )
            return DependencyOutdated(
                installed_version=record.version, base_path=record.base_path
            )

        self.logger.debug(f"{spec.addon_name} 的依赖需求已满足")
        return Satisfied()
