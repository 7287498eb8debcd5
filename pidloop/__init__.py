# -*- coding: utf-8 -*-
"""
pidloop - 离散时间 PID 控制器 (Discrete-Time PID Controller)

[模块结构]
- core/    控制器核心、时间源、Cell、闭环仿真
- config/  默认参数与配置文件加载
- utils/   日志与数据记录
- gui/     PyQt6 调参界面（python main.py 启动）
"""

from .core import (
    Cell, ManualClock, millis,
    Mode, Direction, ProportionalOn,
    MANUAL, AUTOMATIC, DIRECT, REVERSE, P_ON_M, P_ON_E,
    PIDController, FirstOrderPlant, ClosedLoop,
)
from .config import cfg, PIDConfig, SimulationConfig, LogConfig

__version__ = "1.2.1"

__all__ = [
    'Cell', 'ManualClock', 'millis',
    'Mode', 'Direction', 'ProportionalOn',
    'MANUAL', 'AUTOMATIC', 'DIRECT', 'REVERSE', 'P_ON_M', 'P_ON_E',
    'PIDController', 'FirstOrderPlant', 'ClosedLoop',
    'cfg', 'PIDConfig', 'SimulationConfig', 'LogConfig',
]
