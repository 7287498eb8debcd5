# -*- coding: utf-8 -*-
"""
控制器模式常量 (Controller Mode Constants)

数值与 Arduino PID 库保持一致，方便对照前端/串口协议：
- Mode:           MANUAL=0, AUTOMATIC=1
- Direction:      DIRECT=0, REVERSE=1
- ProportionalOn: MEASUREMENT=0 (P_ON_M), ERROR=1 (P_ON_E)
"""

from enum import IntEnum


class Mode(IntEnum):
    """工作模式 (Manual / Automatic)"""
    MANUAL = 0
    AUTOMATIC = 1


class Direction(IntEnum):
    """
    控制方向 (Controller Action)
    DIRECT:  输出增大 -> 输入增大 (例如加热器)
    REVERSE: 输出增大 -> 输入减小 (例如制冷机)
    """
    DIRECT = 0
    REVERSE = 1


class ProportionalOn(IntEnum):
    """比例项作用位置 (Proportional on Measurement / Error)"""
    MEASUREMENT = 0
    ERROR = 1


# 兼容 Arduino 风格的简写
MANUAL = Mode.MANUAL
AUTOMATIC = Mode.AUTOMATIC
DIRECT = Direction.DIRECT
REVERSE = Direction.REVERSE
P_ON_M = ProportionalOn.MEASUREMENT
P_ON_E = ProportionalOn.ERROR
