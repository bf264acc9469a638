# -*- coding: utf-8 -*-
"""
管理提示

将依赖检查结果转换为结构化的提示和补救操作。
只生成纯文本和操作参数，标记渲染、翻译和带签名的链接由宿主的展示层负责。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from ..plugins.dependency.manifest import RequirementSpec
from ..plugins.dependency.resolver import (
    DependencyMissing,
    DependencyOutdated,
    ResolutionOutcome,
    RuntimeTooOld,
)


class RemediationAction(str, Enum):
    """补救操作"""

    INSTALL = "install"
    ACTIVATE = "activate"
    UPGRADE = "upgrade"
    UPGRADE_RUNTIME = "upgrade_runtime"


# 操作 -> (宿主页面, action 参数)
_ACTION_ENDPOINTS: Dict[RemediationAction, Tuple[str, str]] = {
    RemediationAction.INSTALL: ("update.php", "install-plugin"),
    RemediationAction.ACTIVATE: ("plugins.php", "activate"),
    RemediationAction.UPGRADE: ("plugins.php", "upgrade-plugin"),
}

_LINK_LABELS: Dict[RemediationAction, str] = {
    RemediationAction.INSTALL: "install it",
    RemediationAction.ACTIVATE: "activate it",
    RemediationAction.UPGRADE: "update it",
}


@dataclass(frozen=True)
class Remediation:
    """
    补救操作

    target 对 activate/upgrade 是被依赖插件的基础路径，对 install 是安装标识，
    运行时升级没有目标。
    """

    action: RemediationAction
    target: Optional[str] = None

    @property
    def label(self) -> Optional[str]:
        return _LINK_LABELS.get(self.action)

    def query_args(self) -> Optional[Tuple[str, Dict[str, str]]]:
        """返回构造宿主操作链接所需的 (页面, 查询参数)，运行时升级返回 None"""
        endpoint = _ACTION_ENDPOINTS.get(self.action)
        if endpoint is None:
            return None
        page, action = endpoint
        return page, {"action": action, "plugin": self.target or ""}


@dataclass(frozen=True)
class Notice:
    """一条管理提示"""

    addon_name: str
    message: str
    remediation: Remediation
    level: str = "error"

    @property
    def text(self) -> str:
        return f"{self.addon_name} {self.message}"


def build_notice(outcome: ResolutionOutcome, spec: RequirementSpec) -> Optional[Notice]:
    """
    根据检查结果生成提示

    Args:
        outcome: 依赖检查结果
        spec: 依赖需求规范

    Returns:
        提示，依赖满足时返回 None
    """
    if outcome.satisfied:
        return None

    if isinstance(outcome, RuntimeTooOld):
        return Notice(
            addon_name=spec.addon_name,
            message=(
                f"requires at least runtime version {outcome.min_runtime_version} or above! "
                f"You are currently using version {outcome.runtime_version}, which is very old. "
                "Please upgrade the runtime."
            ),
            remediation=Remediation(RemediationAction.UPGRADE_RUNTIME),
        )

    if isinstance(outcome, DependencyMissing):
        if outcome.installed_but_inactive:
            remediation = Remediation(RemediationAction.ACTIVATE, outcome.base_path)
        else:
            remediation = Remediation(RemediationAction.INSTALL, spec.required_plugin_slug)
        return Notice(
            addon_name=spec.addon_name,
            message=(
                f"requires {spec.required_plugin_name}! "
                f"Please {remediation.label} to continue!"
            ),
            remediation=remediation,
        )

    if isinstance(outcome, DependencyOutdated):
        remediation = Remediation(RemediationAction.UPGRADE, outcome.base_path)
        return Notice(
            addon_name=spec.addon_name,
            message=(
                f"requires {spec.required_plugin_name} version {spec.min_plugin_version} "
                f"or above! Please {remediation.label} to continue!"
            ),
            remediation=remediation,
        )

    raise TypeError(f"未知的检查结果类型: {type(outcome).__name__}")


class NoticeBoard:
    """收集一次检查期间排队的提示，由宿主展示层统一取出"""

    def __init__(self):
        self._notices: List[Notice] = []

    def add(self, notice: Notice) -> None:
        self._notices.append(notice)

    def drain(self) -> List[Notice]:
        """取出并清空所有提示"""
        notices, self._notices = self._notices, []
        return notices

    def __iter__(self) -> Iterator[Notice]:
        return iter(list(self._notices))

    def __len__(self) -> int:
        return len(self._notices)
