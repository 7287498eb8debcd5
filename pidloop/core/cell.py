# -*- coding: utf-8 -*-
"""
共享标量单元 (Shared Scalar Cell)

控制器与外部 I/O 层之间通过三个 Cell 交换数据：
- Input    : I/O 层写入，控制器只读
- Setpoint : I/O 层写入，控制器只读
- Output   : 只有控制器写入，I/O 层读取

Cell 由调用方创建和持有，控制器只保存引用，不负责其生命周期。
"""


class Cell:
    """可变标量引用 (Mutable scalar reference)"""

    __slots__ = ('value',)

    def __init__(self, value=0.0):
        self.value = float(value)

    def __repr__(self):
        return f"Cell({self.value!r})"
