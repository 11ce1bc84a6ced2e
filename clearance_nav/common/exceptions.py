#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
自定义异常类：定义寻路模块的专用异常

注意：“找不到路径”和“开放集溢出”不是异常，由搜索结果携带。
"""


class ClearanceNavError(Exception):
    """寻路模块基础异常类"""
    pass


class InvalidCoordinateError(ClearanceNavError, ValueError):
    """坐标超出栅格范围"""
    pass


class ConfigurationError(ClearanceNavError):
    """配置错误异常"""
    pass
