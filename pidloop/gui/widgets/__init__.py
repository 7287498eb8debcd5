# -*- coding: utf-8 -*-
"""
GUI 组件导出 (Widget Exports)

统一导出所有 GUI 组件，方便主窗口导入使用。
"""

from .mode_panel import ModePanel
from .pid_tuner import PIDTuner
from .control_panel import ControlPanel

__all__ = [
    'ModePanel',
    'PIDTuner',
    'ControlPanel'
]
