# -*- coding: utf-8 -*-
"""
调参界面 (Tuning Front-end)
"""

from .main_window import MainWindow

__all__ = ['MainWindow']
