# -*- coding: utf-8 -*-
"""
附加组件激活处理器

在附加组件激活前检查宿主插件和运行时版本，未满足时排队一条管理提示。
宿主状态只在构造时读取一次。
"""

import logging
import platform
from typing import List, Optional

from ..plugins.config.base_config import GateConfig
from ..plugins.dependency.manifest import PluginRecord, RequirementSpec
from ..plugins.dependency.registry import HostPluginRegistry
from ..plugins.dependency.resolver import RequirementResolver, ResolutionOutcome
from .notices import NoticeBoard, build_notice


class AddonActivator:
    """
    附加组件激活处理器

    用法:
        activator = AddonActivator(__file__, registry)
        if activator.requirement_met():
            ...  # 加载附加组件
    """

    def __init__(
        self,
        addon_file_path: str,
        registry: HostPluginRegistry,
        config: Optional[GateConfig] = None,
        runtime_version: Optional[str] = None,
        notice_board: Optional[NoticeBoard] = None,
    ):
        """
        Args:
            addon_file_path: 附加组件主文件路径
            registry: 宿主插件注册表
            config: 依赖门配置，默认使用 GateConfig()
            runtime_version: 当前运行时版本，默认为当前解释器版本
            notice_board: 提示收集器
        """
        self.logger = logging.getLogger(__name__)
        self.config = config or GateConfig()
        self.runtime_version = runtime_version or platform.python_version()
        self.notice_board = notice_board if notice_board is not None else NoticeBoard()
        self._resolver = RequirementResolver()
        self._outcome: Optional[ResolutionOutcome] = None

        metadata = registry.get_own_metadata(addon_file_path)
        if metadata.name:
            addon_name = metadata.name.replace(self.config.effective_name_prefix, "")
        else:
            addon_name = self.config.fallback_addon_name

        self.spec: RequirementSpec = self.config.to_requirement_spec(addon_name)

        # 快照：激活状态以注册表的实时查询为准
        self.inventory: List[PluginRecord] = [
            record.model_copy(
                update={"is_active": registry.is_plugin_active(record.base_path)}
            )
            for record in registry.list_installed_plugins()
        ]

    @property
    def addon_name(self) -> str:
        return self.spec.addon_name

    @property
    def outcome(self) -> Optional[ResolutionOutcome]:
        """最近一次检查的结果，尚未检查时为 None"""
        return self._outcome

    def requirement_met(self) -> bool:
        """
        检查依赖需求，未满足时排队提示

        Returns:
            需求是否满足
        """
        outcome = self._resolver.resolve(self.spec, self.runtime_version, self.inventory)
        self._outcome = outcome

        if outcome.satisfied:
            self.logger.info(f"{self.addon_name}: 依赖需求已满足")
            return True

        notice = build_notice(outcome, self.spec)
        self.notice_board.add(notice)
        self.logger.warning(
            f"{self.addon_name}: 依赖需求未满足 ({type(outcome).__name__}, "
            f"操作: {notice.remediation.action.value})"
        )
        return False
