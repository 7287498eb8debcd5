# -*- coding: utf-8 -*-
"""
配置模块统一接口 (Configuration Module)

[使用方法 Usage]
    from pidloop.config import cfg, PIDConfig, SimulationConfig, LogConfig

    PIDConfig.KP = 0.5
    SimulationConfig.SETPOINT = 30

[配置文件]
启动时如果当前目录下存在 pid_loop.json，会读取其中的默认值：
    {
        "PID": {"KP": 2.0, "KI": 0.5, "SAMPLE_TIME_MS": 50},
        "SIM": {"TIME_CONSTANT_S": 1.5}
    }
只读不写：整定结果不会被保存回文件。
"""

import json
import os
from .pid_config import PIDConfig
from .sim_config import SimulationConfig, LogConfig


class ConfigManager:
    """
    配置管理器 (Configuration Manager)
    提供统一的配置加载接口
    """

    CONFIG_FILE = "pid_loop.json"

    def __init__(self, config_file=None, autoload=True):
        self.config_file = config_file or ConfigManager.CONFIG_FILE
        self.loaded = False
        if autoload:
            self.load_config()

    # ==========================
    # 快捷属性
    # ==========================
    @property
    def PID_KP(self): return PIDConfig.KP
    @PID_KP.setter
    def PID_KP(self, value): PIDConfig.KP = value

    @property
    def PID_KI(self): return PIDConfig.KI
    @PID_KI.setter
    def PID_KI(self, value): PIDConfig.KI = value

    @property
    def PID_KD(self): return PIDConfig.KD
    @PID_KD.setter
    def PID_KD(self, value): PIDConfig.KD = value

    @property
    def SAMPLE_TIME_MS(self): return PIDConfig.SAMPLE_TIME_MS

    @property
    def OUTPUT_LIMITS(self): return (PIDConfig.OUTPUT_MIN, PIDConfig.OUTPUT_MAX)

    @property
    def INTEGRATOR_LIMITS(self): return (PIDConfig.INTEGRATOR_MIN, PIDConfig.INTEGRATOR_MAX)

    # ==========================
    # 配置加载
    # ==========================
    def load_config(self, config_file=None):
        """
        从 JSON 文件加载配置
        Load configuration from file, returns True on success
        """
        from ..utils.logger import Logger
        logger = Logger("Config")

        config_file = config_file or self.config_file
        if not os.path.exists(config_file):
            logger.debug("配置文件不存在，使用默认值", file=config_file)
            return False

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("配置加载失败", file=config_file, reason=e)
            return False

        if not isinstance(data, dict):
            logger.error("配置格式错误，应为 JSON 对象", file=config_file)
            return False

        if 'PID' in data:
            PIDConfig.update_from_dict(data['PID'])
        if 'SIM' in data:
            SimulationConfig.update_from_dict(data['SIM'])

        self.loaded = True
        logger.info(
            "已加载配置", file=config_file,
            Kp=PIDConfig.KP, Ki=PIDConfig.KI, Kd=PIDConfig.KD,
            sample_ms=PIDConfig.SAMPLE_TIME_MS
        )
        return True


# ==========================
# 全局单例
# ==========================
cfg = ConfigManager()

__all__ = [
    'cfg',
    'PIDConfig',
    'SimulationConfig',
    'LogConfig',
    'ConfigManager'
]
