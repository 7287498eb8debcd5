# -*- coding: utf-8 -*-
"""
数据记录器 (Data Recorder)

⭐ PID 调试神器！

[功能]
- 记录控制器的 snapshot()：设定值、输入、输出、P/I/D 各项
- 自动追加保存为 CSV 文件
- QuickPlotter 用 pandas + matplotlib 画图分析

[使用方法]
with DataRecorder("step_test") as recorder:
    while running:
        if pid.step():
            recorder.log(pid.snapshot())
# -> logs/step_test_20260210_143052.csv
"""

import csv
import time
from pathlib import Path
from datetime import datetime

from .logger import Logger

logger = Logger("Recorder")


class DataRecorder:
    """数据记录器"""

    # CSV 列定义
    FIELDNAMES = [
        'timestamp',     # 相对时间（秒）
        'setpoint',      # 设定值
        'input',         # 过程变量
        'output',        # 控制器输出
        'error',         # 误差
        'p_part',        # 比例项
        'i_part',        # 积分项
        'd_part',        # 微分项
        'delta_input',   # 微分项使用的输入变化率
        'kp',            # 当前 Kp 值
        'ki',            # 当前 Ki 值
        'kd',            # 当前 Kd 值
        'mode',
        'direction',
        'p_on',
    ]

    def __init__(self, session_name="pid_debug", auto_save_interval=100, log_dir="logs", clock=time.time):
        """
        初始化记录器
        :param session_name: 会话名称（用于文件命名）
        :param auto_save_interval: 自动保存间隔（记录条数）
        :param log_dir: 输出目录
        :param clock: 时间源（秒），用于 timestamp 列
        """
        self.session_name = session_name
        self.auto_save_interval = auto_save_interval
        self.clock = clock

        # 数据缓冲区
        self.buffer = []
        self.record_count = 0

        # 开始时间
        self.start_time = self.clock()

        # 确保日志目录存在
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        # 生成文件名
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.filename = self.log_dir / f"{session_name}_{timestamp}.csv"

        logger.info("数据记录器已启动", file=self.filename)

    def log(self, snapshot, timestamp=None):
        """
        记录一条数据
        :param snapshot: PIDController.snapshot() 返回的字典
        :param timestamp: 相对时间（秒），默认按 clock 计算
        """
        if timestamp is None:
            timestamp = self.clock() - self.start_time

        record = {'timestamp': f"{timestamp:.3f}"}
        for key in self.FIELDNAMES[1:]:
            value = snapshot.get(key, "")
            record[key] = f"{value:.4f}" if isinstance(value, float) else value

        self.buffer.append(record)
        self.record_count += 1

        # 自动保存
        if self.record_count % self.auto_save_interval == 0:
            self.save()

    def save(self):
        """保存缓冲区数据到文件"""
        if not self.buffer:
            return

        # 判断文件是否存在（决定是否写表头）
        file_exists = self.filename.exists()

        with open(self.filename, 'a', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=self.FIELDNAMES)

            # 第一次写入时添加表头
            if not file_exists:
                writer.writeheader()

            writer.writerows(self.buffer)

        logger.debug("已保存记录", count=len(self.buffer), total=self.record_count)
        self.buffer.clear()

    def close(self):
        """关闭记录器（保存剩余数据）"""
        self.save()
        duration = self.clock() - self.start_time
        logger.info(
            "记录完成", records=self.record_count,
            duration=f"{duration:.1f}s", file=self.filename
        )

    def __enter__(self):
        """支持 with 语句"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """退出时自动保存"""
        self.close()


class QuickPlotter:
    """
    快速绘图工具（pandas + matplotlib）

    [使用方法]
    QuickPlotter.plot_csv("logs/step_test_20260210_143052.csv")
    """

    @staticmethod
    def plot_csv(csv_file, show_plot=True, save_fig=True):
        """
        从 CSV 文件绘制 PID 曲线
        :param csv_file: CSV 文件路径
        :param show_plot: 是否显示图形
        :param save_fig: 是否保存图片（与 CSV 同名 .png）
        :return: matplotlib Figure
        """
        import pandas as pd
        import matplotlib.pyplot as plt

        # 读取数据
        df = pd.read_csv(csv_file)

        # 创建图形
        fig, axes = plt.subplots(3, 1, figsize=(12, 10), sharex=True)
        fig.suptitle(f'PID 调试数据分析 - {Path(csv_file).name}', fontsize=14)

        # 子图1: 设定值 / 过程变量
        axes[0].plot(df['timestamp'], df['setpoint'], '--', label='Setpoint', color='gray')
        axes[0].plot(df['timestamp'], df['input'], label='Input', color='red', alpha=0.8)
        axes[0].set_ylabel('过程变量')
        axes[0].set_title('跟踪曲线 (Tracking)')
        axes[0].legend()
        axes[0].grid(True, alpha=0.3)

        # 子图2: 输出曲线
        axes[1].plot(df['timestamp'], df['output'], label='Output', color='orange')
        axes[1].set_ylabel('输出')
        axes[1].set_title('PID 输出曲线 (Output)')
        axes[1].legend()
        axes[1].grid(True, alpha=0.3)

        # 子图3: P / I / D 分量
        axes[2].plot(df['timestamp'], df['p_part'], label='P', color='purple', alpha=0.7)
        axes[2].plot(df['timestamp'], df['i_part'], label='I', color='green', alpha=0.7)
        axes[2].plot(df['timestamp'], df['d_part'], label='D', color='blue', alpha=0.7)
        axes[2].axhline(y=0, color='gray', linestyle='--', alpha=0.5)
        axes[2].set_xlabel('时间 (秒)')
        axes[2].set_title('分量 (P / I / D)')
        axes[2].legend()
        axes[2].grid(True, alpha=0.3)

        fig.tight_layout()

        # 保存图片
        if save_fig:
            img_file = Path(csv_file).with_suffix('.png')
            fig.savefig(img_file, dpi=150)
            logger.info("图表已保存", file=img_file)

        # 显示图形
        if show_plot:
            plt.show()

        return fig
