# -*- coding: utf-8 -*-
"""
addongate 插件子系统
"""
