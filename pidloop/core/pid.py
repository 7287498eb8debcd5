# -*- coding: utf-8 -*-
"""
PID 控制器核心 (PID Controller Core)

[职责 Responsibility]
离散时间 PID 控制器，按固定采样周期读取 Input / Setpoint，计算并写入 Output。
1. 采样门控：step() 可以被频繁调用，只有经过一个采样周期才真正计算一次
2. 比例项位置：作用于误差 (P_ON_E) 或作用于测量值 (P_ON_M)
3. 微分项使用低通滤波后的输入，避免设定值突变和传感器噪声引起的"微分冲击"
4. 双重抗积分饱和：积分项同时受输出范围和独立积分范围限制

[使用方法 Usage]
    inp, out, sp = Cell(0), Cell(0), Cell(50)
    pid = PIDController(inp, out, sp, kp=2.0, ki=0.5, kd=0.1)
    pid.set_mode(Mode.AUTOMATIC)
    while True:
        inp.value = read_sensor()
        if pid.step():
            write_actuator(out.value)

[注意]
- 无效配置（负增益、min>=max、非正采样周期）会被静默拒绝，保持原有状态
- step() 中不做任何 I/O 或日志，保证每次调用时间有界
"""

from ..config import PIDConfig
from ..utils.logger import Logger
from .clock import millis, elapsed_ms
from .modes import Mode, Direction, ProportionalOn

logger = Logger("PID")

# 输出距离上下限小于该值时视为饱和，P_ON_E 模式下停止积分累加
SATURATION_BAND = 0.01


class PIDController:
    """
    PID 控制器 (Proportional-Integral-Derivative Controller)

    :param input_cell:    过程变量 Cell（只读）
    :param output_cell:   输出 Cell（控制器写入）
    :param setpoint_cell: 设定值 Cell（只读）
    :param kp, ki, kd:    用户增益（Ki 单位 1/s, Kd 单位 s）
    :param p_on:          ProportionalOn.ERROR 或 ProportionalOn.MEASUREMENT
    :param direction:     Direction.DIRECT 或 Direction.REVERSE
    :param clock:         返回毫秒计数的可调用对象，默认 millis()
    """

    def __init__(self, input_cell, output_cell, setpoint_cell,
                 kp, ki, kd, p_on=ProportionalOn.ERROR,
                 direction=Direction.DIRECT, clock=millis):
        # [链接的 Cell] 不拥有，只引用
        self._input = input_cell
        self._output = output_cell
        self._setpoint = setpoint_cell
        self._clock = clock

        self._in_auto = False

        # [用户增益] 显示用，保持用户输入的原样
        self._disp_kp = 0.0
        self._disp_ki = 0.0
        self._disp_kd = 0.0

        # [内部增益] 已按采样周期和方向换算
        self._kp = 0.0
        self._ki = 0.0
        self._kd = 0.0

        self._p_on = ProportionalOn.ERROR
        self._p_on_e = True
        self._direction = Direction.DIRECT

        # [运行状态]
        self._integrator = 0.0
        self._filter_alpha = 0.9
        self._last_input = 0.0
        self._last_filtered_input = 0.0
        self._last_filtered_differential = 0.0
        self._last_error = 0.0
        self._last_p_part = 0.0
        self._last_d_part = 0.0

        # [限幅]
        self._out_min, self._out_max = 0.0, 255.0
        self._integrator_min, self._integrator_max = -100.0, 100.0
        self.set_output_limits(0.0, 255.0)
        self.set_integrator_limits(-100.0, 100.0)

        self._sample_time = 100

        self.set_controller_direction(direction)
        self.set_tunings(kp, ki, kd, p_on)

        # 第一次进入自动模式后立即计算
        self._last_time = (self._clock() - self._sample_time) & 0xFFFFFFFF

    @classmethod
    def from_config(cls, input_cell, output_cell, setpoint_cell, clock=millis, config=PIDConfig):
        """
        按 PIDConfig 的默认值构造控制器
        Build a controller with gains, limits, sample time and filter from config
        """
        pid = cls(
            input_cell, output_cell, setpoint_cell,
            config.KP, config.KI, config.KD,
            p_on=ProportionalOn.ERROR if config.P_ON_E else ProportionalOn.MEASUREMENT,
            direction=Direction.REVERSE if config.REVERSE else Direction.DIRECT,
            clock=clock,
        )
        pid.set_output_limits(config.OUTPUT_MIN, config.OUTPUT_MAX)
        pid.set_integrator_limits(config.INTEGRATOR_MIN, config.INTEGRATOR_MAX)
        pid.set_sample_time(config.SAMPLE_TIME_MS)
        pid.set_smoothing_factor(config.FILTER_ALPHA)
        pid._last_time = (pid._clock() - pid._sample_time) & 0xFFFFFFFF
        return pid

    # ==========================
    # 核心计算
    # ==========================
    def step(self):
        """
        执行一次 PID 计算（如果到了采样时间）
        :return: True 表示本次写入了新的 Output，False 表示手动模式或未到采样时间
        """
        if not self._in_auto:
            return False

        now = self._clock()
        if elapsed_ms(now, self._last_time) < self._sample_time:
            return False

        # 1. 误差
        input_value = self._input.value
        error = self._setpoint.value - input_value
        output_now = self._output.value

        # 2. 积分项：输出已经饱和时 (P_ON_E) 不再累加
        if (not self._p_on_e
                or (self._out_min + SATURATION_BAND < output_now < self._out_max - SATURATION_BAND)):
            self._integrator += self._ki * error

        # 3. 输入 EWMA 低通滤波
        old_filtered = self._last_filtered_input
        self._last_filtered_input = (self._filter_alpha * old_filtered
                                     + (1.0 - self._filter_alpha) * input_value)

        # 4. 微分输入：对输入求导而不是对误差求导，设定值突变不会产生冲击
        if self._p_on_e:
            d_input = (self._last_filtered_input - old_filtered) / (self._sample_time / 1000.0)
        else:
            # P_ON_M 需要原始噪声才能启动，所以不用滤波值
            d_input = input_value - self._last_input

        # 5. P_ON_M：比例项折算进积分和
        if not self._p_on_e:
            self._integrator -= self._kp * d_input

        # 6. 积分项受输出范围限制
        if self._integrator > self._out_max:
            self._integrator = self._out_max
        elif self._integrator < self._out_min:
            self._integrator = self._out_min

        # 7. P_ON_E：积分项再受独立积分范围限制
        if self._p_on_e:
            if self._integrator > self._integrator_max:
                self._integrator = self._integrator_max
            elif self._integrator < self._integrator_min:
                self._integrator = self._integrator_min

        # 8. 合成输出
        p_part = self._kp * error if self._p_on_e else 0.0
        d_part = -self._kd * d_input
        output = p_part + self._integrator + d_part

        # 9. 输出限幅并写出
        if output > self._out_max:
            output = self._out_max
        elif output < self._out_min:
            output = self._out_min
        self._output.value = output

        # 10. 记录状态
        self._last_filtered_differential = d_input
        self._last_input = input_value
        self._last_p_part = p_part
        self._last_d_part = d_part
        self._last_error = error
        self._last_time = now
        return True

    # ==========================
    # 参数设置
    # ==========================
    def set_tunings(self, kp, ki, kd, p_on=None):
        """
        动态调整 PID 参数
        :param kp, ki, kd: 用户增益，任一为负则整体拒绝
        :param p_on: 比例项位置，None 表示沿用上一次的设置
        """
        if kp < 0 or ki < 0 or kd < 0:
            logger.warning("PID参数为负，已忽略", kp=kp, ki=ki, kd=kd)
            return

        if p_on is None:
            p_on = self._p_on
        try:
            p_on = ProportionalOn(p_on)
        except ValueError:
            logger.warning("比例项位置无效，已忽略", p_on=p_on)
            return
        self._p_on = p_on
        self._p_on_e = self._p_on == ProportionalOn.ERROR

        self._disp_kp, self._disp_ki, self._disp_kd = kp, ki, kd

        sample_time_s = self._sample_time / 1000.0
        self._kp = kp
        self._ki = ki * sample_time_s
        self._kd = kd / sample_time_s

        if self._direction == Direction.REVERSE:
            self._kp = -self._kp
            self._ki = -self._ki
            self._kd = -self._kd

        # 关闭积分时清空积分和
        if ki == 0:
            self._integrator = 0.0

    def set_sample_time(self, new_sample_time):
        """
        设置采样周期（毫秒），按比例换算 ki / kd 保持连续时间增益不变
        """
        try:
            new_sample_time = int(new_sample_time)
        except (TypeError, ValueError, OverflowError):
            logger.warning("采样周期无效，已忽略", sample_time=new_sample_time)
            return
        if new_sample_time <= 0:
            logger.warning("采样周期必须为正整数，已忽略", sample_time=new_sample_time)
            return

        ratio = new_sample_time / self._sample_time
        self._ki *= ratio
        self._kd /= ratio
        self._sample_time = new_sample_time

    def set_smoothing_factor(self, alpha):
        """输入低通滤波系数，越大滤波越强（调用方保证 0 < alpha < 1）"""
        self._filter_alpha = alpha

    def set_output_limits(self, out_min, out_max):
        """输出限幅；自动模式下立即把 Output 和积分项拉回新范围"""
        if out_min >= out_max:
            logger.warning("输出限幅无效 (min >= max)，已忽略", min=out_min, max=out_max)
            return
        self._out_min, self._out_max = out_min, out_max

        if self._in_auto:
            if self._output.value > self._out_max:
                self._output.value = self._out_max
            elif self._output.value < self._out_min:
                self._output.value = self._out_min

            if self._integrator > self._out_max:
                self._integrator = self._out_max
            elif self._integrator < self._out_min:
                self._integrator = self._out_min

    def set_integrator_limits(self, integrator_min, integrator_max):
        """积分限幅；可以比输出范围更窄"""
        if integrator_min >= integrator_max:
            logger.warning("积分限幅无效 (min >= max)，已忽略", min=integrator_min, max=integrator_max)
            return
        self._integrator_min, self._integrator_max = integrator_min, integrator_max

        if self._in_auto:
            if self._integrator > self._integrator_max:
                self._integrator = self._integrator_max
            elif self._integrator < self._integrator_min:
                self._integrator = self._integrator_min

    def set_mode(self, mode):
        """
        设置工作模式
        手动 -> 自动时自动初始化，实现无扰切换 (bumpless transfer)
        """
        new_auto = mode == Mode.AUTOMATIC
        if new_auto and not self._in_auto:
            self._initialize()
            logger.debug("切换到自动模式", output=self._output.value, input=self._input.value)
        self._in_auto = new_auto

    def _initialize(self):
        """用当前 Output / Input 作为积分和与滤波器的初值"""
        self._integrator = self._output.value
        self._last_input = self._last_filtered_input = self._input.value

        if self._integrator > self._out_max:
            self._integrator = self._out_max
        elif self._integrator < self._out_min:
            self._integrator = self._out_min

    def set_controller_direction(self, direction):
        """
        设置控制方向
        DIRECT:  +Output -> +Input
        REVERSE: +Output -> -Input
        自动模式下方向改变会立即翻转内部增益符号
        """
        try:
            direction = Direction(direction)
        except ValueError:
            logger.warning("控制方向无效，已忽略", direction=direction)
            return
        if self._in_auto and direction != self._direction:
            self._kp = -self._kp
            self._ki = -self._ki
            self._kd = -self._kd
        self._direction = direction

    # ==========================
    # 状态查询（显示/遥测用，不参与控制）
    # ==========================
    @property
    def kp(self):
        return self._disp_kp

    @property
    def ki(self):
        return self._disp_ki

    @property
    def kd(self):
        return self._disp_kd

    @property
    def scaled_gains(self):
        """内部增益 (kp, ki, kd)，已按采样周期和方向换算"""
        return (self._kp, self._ki, self._kd)

    @property
    def mode(self):
        return Mode.AUTOMATIC if self._in_auto else Mode.MANUAL

    @property
    def direction(self):
        return self._direction

    @property
    def p_on(self):
        return self._p_on

    @property
    def p_on_e(self):
        return self._p_on_e

    @property
    def delta_input(self):
        """上一次计算微分项使用的输入变化率"""
        return self._last_filtered_differential

    @property
    def input_error(self):
        return self._last_error

    @property
    def last_p_part(self):
        return self._last_p_part

    @property
    def last_i_part(self):
        return self._integrator

    @property
    def last_d_part(self):
        return self._last_d_part

    @property
    def sample_time(self):
        return self._sample_time

    @property
    def smoothing_factor(self):
        return self._filter_alpha

    @property
    def output_limits(self):
        return (self._out_min, self._out_max)

    @property
    def integrator_limits(self):
        return (self._integrator_min, self._integrator_max)

    def snapshot(self):
        """
        当前状态字典（用于 DataRecorder / 界面显示）
        Returns a flat dict of the introspection values
        """
        return {
            'setpoint': self._setpoint.value,
            'input': self._input.value,
            'output': self._output.value,
            'error': self._last_error,
            'p_part': self._last_p_part,
            'i_part': self._integrator,
            'd_part': self._last_d_part,
            'delta_input': self._last_filtered_differential,
            'kp': self._disp_kp,
            'ki': self._disp_ki,
            'kd': self._disp_kd,
            'mode': self.mode.name,
            'direction': self._direction.name,
            'p_on': self._p_on.name,
        }

    def __repr__(self):
        return (f"PIDController(Kp={self._disp_kp}, Ki={self._disp_ki}, Kd={self._disp_kd}, "
                f"{self._p_on.name}, {self._direction.name}, {self.mode.name})")
