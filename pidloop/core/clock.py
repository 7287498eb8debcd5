# -*- coding: utf-8 -*-
"""
时间源 (Millisecond Time Source)

控制器只需要一个"返回毫秒计数"的可调用对象。
- millis():     基于 time.monotonic_ns 的真实时钟，按 32 位无符号数回绕
- ManualClock:  手动推进的时钟，用于仿真和单元测试（结果完全可复现）
"""

import time

# 32 位无符号计数器回绕 (与 Arduino millis() 相同)
TICK_MASK = 0xFFFFFFFF


def millis():
    """单调递增的毫秒计数 (mod 2**32)"""
    return (time.monotonic_ns() // 1_000_000) & TICK_MASK


def elapsed_ms(now, then):
    """无符号取模减法，计数器回绕后仍然正确"""
    return (now - then) & TICK_MASK


class ManualClock:
    """
    手动时钟 (Manual Clock)

    clock = ManualClock()
    pid = PIDController(..., clock=clock)
    clock.advance(100)
    pid.step()
    """

    def __init__(self, start_ms=0):
        self.now_ms = int(start_ms) & TICK_MASK

    def __call__(self):
        return self.now_ms

    def advance(self, ms):
        """向前推进 ms 毫秒，返回新的时间"""
        self.now_ms = (self.now_ms + int(ms)) & TICK_MASK
        return self.now_ms
