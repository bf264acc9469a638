# -*- coding: utf-8 -*-
"""
addongate 核心异常
"""


class AddonGateException(Exception):
    """所有 addongate 自定义异常的基类。"""

    pass


# region 注册表异常


class RegistryError(AddonGateException):
    """与宿主插件注册表相关的错误的基类。"""

    pass


class PluginNotFoundError(RegistryError, KeyError):
    """当注册表中找不到指定基础路径的插件时引发。"""

    pass


# endregion

# region 输入异常


class InventoryLoadError(AddonGateException, ValueError):
    """当插件清单快照无法加载或解析时引发。"""

    pass


class GateConfigurationError(AddonGateException, ValueError):
    """当依赖门配置文件无效时引发。"""

    pass


# endregion
