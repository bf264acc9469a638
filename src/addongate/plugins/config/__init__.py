# -*- coding: utf-8 -*-
"""
addongate 配置系统
"""

from .base_config import BaseGateConfig, GateConfig
from .validator import ConfigValidator

__all__ = ["BaseGateConfig", "GateConfig", "ConfigValidator"]
