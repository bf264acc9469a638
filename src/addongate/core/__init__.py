# -*- coding: utf-8 -*-
"""
addongate 核心组件
"""

from .activator import AddonActivator
from .notices import Notice, NoticeBoard, Remediation, RemediationAction, build_notice

__all__ = [
    "AddonActivator",
    "Notice",
    "NoticeBoard",
    "Remediation",
    "RemediationAction",
    "build_notice",
]
