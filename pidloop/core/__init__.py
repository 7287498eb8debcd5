# -*- coding: utf-8 -*-
"""
控制核心导出 (Control Core)
"""

from .cell import Cell
from .clock import ManualClock, millis, elapsed_ms
from .modes import (
    Mode, Direction, ProportionalOn,
    MANUAL, AUTOMATIC, DIRECT, REVERSE, P_ON_M, P_ON_E
)
from .pid import PIDController
from .simulation import FirstOrderPlant, ClosedLoop

__all__ = [
    'Cell',
    'ManualClock',
    'millis',
    'elapsed_ms',
    'Mode',
    'Direction',
    'ProportionalOn',
    'MANUAL', 'AUTOMATIC', 'DIRECT', 'REVERSE', 'P_ON_M', 'P_ON_E',
    'PIDController',
    'FirstOrderPlant',
    'ClosedLoop',
]
