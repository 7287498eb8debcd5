# -*- coding: utf-8 -*-
"""
闭环仿真 (Closed-Loop Simulation)

[职责 Responsibility]
给调参界面和测试提供一个"虚拟被控对象"：
1. FirstOrderPlant: 一阶惯性环节 + 测量噪声
2. ClosedLoop:      持有 Input/Output/Setpoint 三个 Cell、手动时钟、
                    被控对象和 PID 控制器，按 tick 推进时间

[架构 Architecture]
ClosedLoop 扮演外部 I/O 层：写 Input / Setpoint，读 Output。
控制器本身不知道自己在仿真里。
"""

from collections import deque

import numpy as np

from ..config import PIDConfig, SimulationConfig
from ..utils.logger import Logger
from .cell import Cell
from .clock import ManualClock
from .modes import Mode
from .pid import PIDController

logger = Logger("Simulation")


class FirstOrderPlant:
    """
    一阶惯性环节 (First-Order Plant)
    tau * dx/dt = K * u - x
    """

    def __init__(self, gain=1.0, time_constant=1.0, noise_std=0.0, initial=0.0, seed=None):
        self.gain = gain
        self.time_constant = time_constant
        self.noise_std = noise_std
        self.initial = initial
        self.rng = np.random.default_rng(seed)
        self.state = float(initial)

    def reset(self):
        """ 恢复到初始状态 """
        self.state = float(self.initial)

    def update(self, u, dt):
        """
        积分 dt 秒，返回带噪声的测量值
        :param u: 控制量
        :param dt: 时间步长（秒）
        """
        self.state += (self.gain * u - self.state) * dt / self.time_constant
        return self.measure()

    def measure(self):
        if self.noise_std > 0:
            return self.state + float(self.rng.normal(0.0, self.noise_std))
        return self.state


class ClosedLoop:
    """
    闭环仿真器 (Closed-Loop Simulator)

    loop = ClosedLoop()
    loop.controller.set_mode(Mode.AUTOMATIC)
    loop.run(10_000)
    t, sp, pv, out = loop.history()
    """

    def __init__(self, plant=None, setpoint=None, tick_ms=None,
                 history_size=None, clock=None, config=PIDConfig):
        self.tick_ms = int(tick_ms or SimulationConfig.TICK_MS)
        self.clock = clock or ManualClock()

        if plant is None:
            plant = FirstOrderPlant(
                gain=SimulationConfig.PLANT_GAIN,
                time_constant=SimulationConfig.TIME_CONSTANT_S,
                noise_std=SimulationConfig.NOISE_STD,
                initial=SimulationConfig.INITIAL_VALUE,
                seed=SimulationConfig.RANDOM_SEED,
            )
        self.plant = plant

        # [I/O Cell]
        self.input = Cell(plant.measure())
        self.output = Cell(0.0)
        self.setpoint = Cell(SimulationConfig.SETPOINT if setpoint is None else setpoint)

        # [控制器] 与上面三个 Cell 链接
        self.controller = PIDController.from_config(
            self.input, self.output, self.setpoint, clock=self.clock, config=config
        )

        size = history_size or SimulationConfig.HISTORY_SIZE
        self._times = deque(maxlen=size)
        self._setpoints = deque(maxlen=size)
        self._inputs = deque(maxlen=size)
        self._outputs = deque(maxlen=size)
        self.elapsed_ms = 0
        self.computations = 0
        self._pending_ms = 0

    # ==========================
    # 推进
    # ==========================
    def advance(self, ms):
        """
        推进 ms 毫秒；不足一个 tick 的余数留到下一次推进
        :return: 本次推进中控制器实际计算的次数
        """
        computed = 0
        dt = self.tick_ms / 1000.0
        ticks, self._pending_ms = divmod(self._pending_ms + int(ms), self.tick_ms)
        for _ in range(ticks):
            self.clock.advance(self.tick_ms)
            self.elapsed_ms += self.tick_ms

            if self.controller.step():
                computed += 1
                self._record()

            self.input.value = self.plant.update(self.output.value, dt)

        self.computations += computed
        return computed

    def run(self, duration_ms):
        """ 连续运行 duration_ms 毫秒 """
        computed = self.advance(duration_ms)
        logger.debug("仿真完成", duration_ms=duration_ms, computations=computed,
                     final_input=round(self.input.value, 3))
        return self.history()

    def _record(self):
        self._times.append(self.elapsed_ms / 1000.0)
        self._setpoints.append(self.setpoint.value)
        self._inputs.append(self.input.value)
        self._outputs.append(self.output.value)

    # ==========================
    # 外部操作
    # ==========================
    def set_setpoint(self, value):
        self.setpoint.value = float(value)

    def set_manual_output(self, value):
        """ 手动模式下直接给定输出；自动模式下会被控制器覆盖 """
        if self.controller.mode == Mode.MANUAL:
            self.output.value = float(value)

    def reset(self):
        """ 重置被控对象和历史数据，控制器回到手动模式 """
        self.controller.set_mode(Mode.MANUAL)
        self.plant.reset()
        self.input.value = self.plant.measure()
        self.output.value = 0.0
        self._times.clear()
        self._setpoints.clear()
        self._inputs.clear()
        self._outputs.clear()
        self.elapsed_ms = 0
        self.computations = 0
        self._pending_ms = 0
        logger.info("仿真已重置")

    def history(self):
        """
        :return: (time_s, setpoint, input, output) 四个 numpy 数组
        """
        return (
            np.array(self._times),
            np.array(self._setpoints),
            np.array(self._inputs),
            np.array(self._outputs),
        )
