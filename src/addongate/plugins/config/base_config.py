# -*- coding: utf-8 -*-
"""
addongate 基础配置模块
提供基于 Pydantic 的配置验证机制，支持环境变量解析和多环境配置
"""

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ...exceptions import GateConfigurationError
from ..dependency.manifest import (
    DEFAULT_MIN_PLUGIN_VERSION,
    DEFAULT_REQUIRED_PLUGIN_NAME,
    DEFAULT_REQUIRED_PLUGIN_SLUG,
    RequirementSpec,
    coerce_version,
)

T = TypeVar("T", bound="BaseGateConfig")

# 环境变量匹配模式: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\${([A-Za-z0-9_]+)}")


class _ConfigLoader(yaml.SafeLoader):
    """浮点数保留原文，版本号 6.10 不会被读成 6.1"""


_ConfigLoader.add_constructor(
    "tag:yaml.org,2002:float", lambda loader, node: loader.construct_scalar(node)
)


def deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """深度合并两个字典，overrides 中的值会覆盖 base 中的值"""
    result = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and key in result and isinstance(result[key], dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class BaseGateConfig(BaseModel):
    """
    所有配置的基类

    1. **严格模式验证**：禁止额外字段，防止配置错误
    2. **环境变量解析**：自动解析 "${VAR_NAME}" 格式的环境变量
    3. **多环境配置**：根据 APP_ENV 环境变量加载不同环境的配置
    """

    @model_validator(mode="before")
    @classmethod
    def _resolve_env_vars(cls, data: Any) -> Any:
        """
        在其他验证执行前递归解析环境变量

        Raises:
            ValueError: 当环境变量未设置时抛出
        """
        if not isinstance(data, dict):
            return data

        def _resolve(value: Any) -> Any:
            if isinstance(value, str):
                match = ENV_VAR_PATTERN.match(value)
                if not match:
                    return value
                env_var_name = match.group(1)
                env_var_value = os.getenv(env_var_name)
                if env_var_value is None:
                    raise ValueError(f"环境变量 '{env_var_name}' 未设置")
                return env_var_value
            elif isinstance(value, dict):
                return {k: _resolve(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [_resolve(v) for v in value]
            else:
                return value

        return _resolve(data)

    @classmethod
    def load_from_dict(
        cls: Type[T],
        config_data: Dict[str, Any],
        env: Optional[str] = None,
    ) -> T:
        """
        从字典加载配置，支持环境特定的配置覆盖

        配置结构示例：
        {
            "default": {"min_plugin_version": "6.0.0"},
            "production": {"min_runtime_version": "7.4.0"}
        }

        Args:
            config_data: 配置字典
            env: 目标环境，为 None 时使用 os.getenv("APP_ENV", "development")

        Returns:
            配置模型实例
        """
        if env is None:
            env = os.getenv("APP_ENV", "development")

        # 空的 YAML 节点读出来是 None
        base_config = config_data.get("default") or {}
        env_config = config_data.get(env) or {}
        for section, value in (("default", base_config), (env, env_config)):
            if not isinstance(value, dict):
                raise GateConfigurationError(f"配置节 '{section}' 必须是映射结构")

        return cls(**deep_merge(base_config, env_config))

    @classmethod
    def load_from_file(cls: Type[T], config_path: Path, env: Optional[str] = None) -> T:
        """
        从 YAML 文件加载配置

        Raises:
            GateConfigurationError: 文件不存在或不是映射结构
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise GateConfigurationError(f"配置文件不存在: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.load(f, Loader=_ConfigLoader) or {}
        except (OSError, yaml.YAMLError) as e:
            raise GateConfigurationError(f"读取配置文件失败 {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise GateConfigurationError(f"配置文件必须是映射结构: {config_path}")

        return cls.load_from_dict(data, env=env)

    # Pydantic v2 配置
    model_config = ConfigDict(
        extra="forbid", validate_assignment=True  # 禁止额外字段  # 赋值时验证
    )


class GateConfig(BaseGateConfig):
    """依赖门配置"""

    required_plugin_name: str = DEFAULT_REQUIRED_PLUGIN_NAME
    required_plugin_slug: str = DEFAULT_REQUIRED_PLUGIN_SLUG
    min_plugin_version: str = DEFAULT_MIN_PLUGIN_VERSION
    # 为 None 时不检查运行时版本
    min_runtime_version: Optional[str] = None
    fallback_addon_name: str = "This plugin"
    # 为 None 时使用 "<required_plugin_name> - "
    addon_name_prefix: Optional[str] = None

    @property
    def effective_name_prefix(self) -> str:
        if self.addon_name_prefix is not None:
            return self.addon_name_prefix
        return f"{self.required_plugin_name} - "

    @field_validator("min_plugin_version", mode="before")
    @classmethod
    def validate_min_plugin_version(cls, v):
        # YAML 中未加引号的 6.5 会被读成浮点数
        return coerce_version(v)

    @field_validator("min_runtime_version", mode="before")
    @classmethod
    def validate_min_runtime_version(cls, v):
        if v is None:
            return None
        return coerce_version(v)

    def to_requirement_spec(self, addon_name: str) -> RequirementSpec:
        """根据配置生成依赖需求规范"""
        return RequirementSpec(
            addon_name=addon_name,
            required_plugin_name=self.required_plugin_name,
            required_plugin_slug=self.required_plugin_slug,
            min_plugin_version=self.min_plugin_version,
            min_runtime_version=self.min_runtime_version or "0",
        )
