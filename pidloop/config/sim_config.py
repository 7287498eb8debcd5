# -*- coding: utf-8 -*-
"""
仿真与调参界面配置 (Simulation & Front-end Configuration)

[被控对象 Plant]
一阶惯性环节:  tau * dx/dt = K * u - x
- PLANT_GAIN:      稳态增益 K
- TIME_CONSTANT_S: 时间常数 tau（秒）
- NOISE_STD:       测量噪声标准差（P_ON_M 模式需要一点噪声才能起步）
"""


class SimulationConfig:
    """仿真参数 (Simulation Parameters)"""

    # ==========================
    # 被控对象
    # ==========================
    PLANT_GAIN = 1.0
    TIME_CONSTANT_S = 2.0
    NOISE_STD = 0.05
    INITIAL_VALUE = 0.0
    RANDOM_SEED = None

    # ==========================
    # 仿真步进
    # ==========================
    SETPOINT = 50.0
    TICK_MS = 10            # 仿真最小时间步（毫秒）
    HISTORY_SIZE = 2000     # 保留的历史点数

    # ==========================
    # 界面
    # ==========================
    GUI_REFRESH_MS = 50     # QTimer 刷新周期
    SETPOINT_RANGE = (0, 100)

    @classmethod
    def get_plant_dict(cls):
        return {
            'PLANT_GAIN': cls.PLANT_GAIN,
            'TIME_CONSTANT_S': cls.TIME_CONSTANT_S,
            'NOISE_STD': cls.NOISE_STD,
            'INITIAL_VALUE': cls.INITIAL_VALUE,
            'RANDOM_SEED': cls.RANDOM_SEED,
            'SETPOINT': cls.SETPOINT,
            'TICK_MS': cls.TICK_MS,
        }

    @classmethod
    def update_from_dict(cls, data):
        for key in cls.get_plant_dict():
            if key in data:
                setattr(cls, key, data[key])


class LogConfig:
    """日志参数 (Logging Parameters)"""

    LOG_DIR = "logs"
    LOG_TO_FILE = False     # 调参时可打开，日志写入 logs/system_*.log
    LEVEL = "INFO"
