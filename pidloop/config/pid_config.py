# -*- coding: utf-8 -*-
"""
PID 控制参数配置 (PID Control Configuration)

[调参指南 Tuning Guide]
- Kp (比例): 主要动力，越大响应越快，但容易震荡
- Ki (积分): 消除稳态误差，单位为 1/秒
- Kd (微分): 阻尼作用，抑制震荡，相当于"刹车"

[关于默认值]
输出范围 0-255 对应 Arduino PWM，采样周期 100ms。
积分限幅可以比输出范围更窄，用于抗积分饱和 (anti-windup)。

[滤波系数 FILTER_ALPHA]
输入低通滤波系数 (0~1)，越大滤波越强，但延迟越大。
"""


class PIDConfig:
    """PID 控制参数 (PID Control Parameters)"""

    # ==========================
    # PID 三要素
    # ==========================
    KP = 2.0    # 比例系数 (Proportional Gain)
    KI = 0.5    # 积分系数 (Integral Gain, 1/s)
    KD = 0.1    # 微分系数 (Derivative Gain, s)

    # ==========================
    # 模式
    # ==========================
    P_ON_E = True       # True=比例作用于误差, False=比例作用于测量值
    REVERSE = False     # 反向作用（输出增大 -> 输入减小）

    # ==========================
    # 采样与滤波
    # ==========================
    SAMPLE_TIME_MS = 100    # 采样周期（毫秒）
    FILTER_ALPHA = 0.9      # 输入 EWMA 滤波系数

    # ==========================
    # 限幅
    # ==========================
    OUTPUT_MIN = 0.0
    OUTPUT_MAX = 255.0
    INTEGRATOR_MIN = -100.0
    INTEGRATOR_MAX = 100.0

    @classmethod
    def get_tuning_dict(cls):
        """
        返回可调参数字典（用于GUI显示）
        Returns tunable parameters as dict
        """
        return {
            'KP': cls.KP,
            'KI': cls.KI,
            'KD': cls.KD,
            'P_ON_E': cls.P_ON_E,
            'REVERSE': cls.REVERSE,
            'SAMPLE_TIME_MS': cls.SAMPLE_TIME_MS,
            'FILTER_ALPHA': cls.FILTER_ALPHA,
            'OUTPUT_MIN': cls.OUTPUT_MIN,
            'OUTPUT_MAX': cls.OUTPUT_MAX,
            'INTEGRATOR_MIN': cls.INTEGRATOR_MIN,
            'INTEGRATOR_MAX': cls.INTEGRATOR_MAX,
        }

    @classmethod
    def update_from_dict(cls, data):
        """
        从字典更新参数（用于加载配置文件）
        Update parameters from dict, unknown keys are ignored
        """
        for key in cls.get_tuning_dict():
            if key in data:
                setattr(cls, key, data[key])
