# -*- coding: utf-8 -*-
"""
addongate 配置验证器
提供统一的配置验证入口点，集成 Pydantic 验证机制
"""

from typing import Any, Dict, Optional, Type

from .base_config import T


class ConfigValidator:
    """配置验证器，负责处理和验证原始配置数据"""

    @staticmethod
    def validate(
        config_model: Type[T],
        config_data: Optional[Dict[str, Any]],
        env: Optional[str] = None,
    ) -> T:
        """
        根据指定的 Pydantic 模型验证原始配置数据

        Args:
            config_model: BaseGateConfig 的子类
            config_data: 原始配置字典，为 None 时使用默认配置
            env: 目标环境，为 None 时使用环境变量 APP_ENV

        Returns:
            验证后的配置对象

        Raises:
            ValidationError: 当数据验证失败时抛出
            ValueError: 当环境变量未设置时抛出
        """
        if config_data is None:
            return config_model()
        return config_model.load_from_dict(config_data, env=env)
