# -*- coding: utf-8 -*-
"""
结构化日志工具 (Structured Logger)

[功能]
- 统一的日志格式
- 不同级别的日志（DEBUG, INFO, WARNING, ERROR）
- 输出到控制台，可选同时写入文件 (LogConfig.LOG_TO_FILE)

[使用方法]
from pidloop.utils.logger import Logger

logger = Logger("PID")
logger.info("控制器初始化完成")
logger.warning("参数被拒绝", kp=-1.0)
"""

import logging
import sys
from pathlib import Path
from datetime import datetime


class Logger:
    """结构化日志器"""

    # 全局设置
    _initialized = False

    def __init__(self, name, log_to_file=None):
        """
        初始化日志器
        :param name: 模块名称
        :param log_to_file: 是否同时写入文件（None 表示使用 LogConfig）
        """
        self.logger = logging.getLogger(f"pidloop.{name}")

        # 避免重复初始化
        if not Logger._initialized:
            Logger._initialized = True
            Logger._setup_logging(log_to_file)

    @staticmethod
    def _setup_logging(log_to_file):
        """设置全局日志配置"""
        from ..config.sim_config import LogConfig

        if log_to_file is None:
            log_to_file = LogConfig.LOG_TO_FILE

        # 日志格式
        formatter = logging.Formatter(
            '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s',
            datefmt='%H:%M:%S'
        )

        # 控制台处理器
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)

        # 项目根日志器配置
        root_logger = logging.getLogger("pidloop")
        root_logger.setLevel(getattr(logging, str(LogConfig.LEVEL).upper(), logging.INFO))
        root_logger.addHandler(console_handler)

        # 文件处理器（可选）
        if log_to_file:
            log_dir = Path(LogConfig.LOG_DIR)
            log_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = log_dir / f"system_{timestamp}.log"

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

            root_logger.info(f"日志文件: {log_file}")

    def debug(self, message, **kwargs):
        """调试信息"""
        self.logger.debug(self._format_message(message, kwargs))

    def info(self, message, **kwargs):
        """一般信息"""
        self.logger.info(self._format_message(message, kwargs))

    def warning(self, message, **kwargs):
        """警告信息"""
        self.logger.warning(self._format_message(message, kwargs))

    def error(self, message, **kwargs):
        """错误信息"""
        self.logger.error(self._format_message(message, kwargs))

    def critical(self, message, **kwargs):
        """严重错误"""
        self.logger.critical(self._format_message(message, kwargs))

    @staticmethod
    def _format_message(message, kwargs):
        """格式化消息（添加键值对参数）"""
        if not kwargs:
            return message

        params = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        return f"{message} ({params})"


# 快捷方式（全局日志器）
_global_logger = Logger("System")

def debug(message, **kwargs):
    _global_logger.debug(message, **kwargs)

def info(message, **kwargs):
    _global_logger.info(message, **kwargs)

def warning(message, **kwargs):
    _global_logger.warning(message, **kwargs)

def error(message, **kwargs):
    _global_logger.error(message, **kwargs)

def critical(message, **kwargs):
    _global_logger.critical(message, **kwargs)
