# -*- coding: utf-8 -*-
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QGroupBox, QFormLayout
)
from PyQt6.QtCore import pyqtSlot, QTimer

from ..config import PIDConfig, SimulationConfig
from ..core.modes import Mode, Direction, ProportionalOn
from ..core.simulation import ClosedLoop
from ..utils.data_recorder import DataRecorder
from ..utils.logger import Logger
from .widgets import ModePanel, PIDTuner, ControlPanel

logger = Logger("GUI")


class MainWindow(QMainWindow):
    """
    主窗口类 (Main GUI Window)

    [架构 Architecture]
    基于 PyQt6 的 PID 调参前端。它充当"外部 I/O 层"：
    1. 用 QTimer 推进闭环仿真 (ClosedLoop)，仿真内部按采样周期调用 step()
    2. 把滑块/按钮的操作转成控制器的 set_* 调用
    3. 显示控制器的状态查询结果 (P/I/D 分量、误差、输出)
    4. 可选把每次计算的 snapshot() 写入 CSV
    """
    def __init__(self, loop=None):
        super().__init__()
        self.setWindowTitle("PID Loop - 离散 PID 调参台")
        self.resize(900, 560)

        # [闭环仿真]
        self.loop = loop or ClosedLoop()
        self.pid = self.loop.controller
        self.recorder = None

        # 初始化UI布局
        self.init_ui()
        self.init_signals()

        # [仿真 Timer]
        # 界面刷新与控制器采样周期解耦：
        # 每次 timeout 推进 GUI_REFRESH_MS 毫秒，控制器自己决定是否计算
        self.sim_timer = QTimer()
        self.sim_timer.timeout.connect(self.sim_tick)

        self.refresh_telemetry()

    def init_ui(self):
        """ 初始化界面布局 (Layouts & Widgets) """
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        # 主布局: 水平 (左侧调参, 右侧状态)
        main_layout = QHBoxLayout(central_widget)

        # ==========================
        # 左侧: 调参
        # ==========================
        left_layout = QVBoxLayout()

        self.pid_tuner = PIDTuner(
            self.pid.kp, self.pid.ki, self.pid.kd,
            p_on_e=self.pid.p_on_e,
            reverse=self.pid.direction == Direction.REVERSE
        )
        left_layout.addWidget(self.pid_tuner)

        self.mode_panel = ModePanel(output_limits=self.pid.output_limits)
        left_layout.addWidget(self.mode_panel)

        self.control_panel = ControlPanel(setpoint=self.loop.setpoint.value)
        left_layout.addWidget(self.control_panel)

        left_layout.addStretch()
        main_layout.addLayout(left_layout, 1)

        # ==========================
        # 右侧: 状态显示
        # ==========================
        right_layout = QVBoxLayout()

        grp_state = QGroupBox("控制器状态 (Telemetry)")
        form = QFormLayout()
        self.telemetry_labels = {}
        for key, text in [
            ('setpoint', "设定值 (Setpoint)"),
            ('input', "输入 (Input)"),
            ('output', "输出 (Output)"),
            ('error', "误差 (Error)"),
            ('p_part', "P 分量"),
            ('i_part', "I 分量 (积分和)"),
            ('d_part', "D 分量"),
            ('delta_input', "输入变化率 (dInput)"),
            ('mode', "模式"),
            ('direction', "方向"),
            ('p_on', "比例位置"),
        ]:
            label = QLabel("-")
            label.setStyleSheet("font-family: monospace;")
            form.addRow(text, label)
            self.telemetry_labels[key] = label
        grp_state.setLayout(form)
        right_layout.addWidget(grp_state)

        grp_info = QGroupBox("参数 (Limits)")
        info_layout = QFormLayout()
        self.lbl_sample_time = QLabel(f"{self.pid.sample_time} ms")
        self.lbl_output_limits = QLabel("{:.1f} ~ {:.1f}".format(*self.pid.output_limits))
        self.lbl_integrator_limits = QLabel("{:.1f} ~ {:.1f}".format(*self.pid.integrator_limits))
        info_layout.addRow("采样周期", self.lbl_sample_time)
        info_layout.addRow("输出限幅", self.lbl_output_limits)
        info_layout.addRow("积分限幅", self.lbl_integrator_limits)
        grp_info.setLayout(info_layout)
        right_layout.addWidget(grp_info)

        # 状态栏
        self.status_label = QLabel("系统就绪")
        self.status_label.setStyleSheet("color: gray;")
        right_layout.addWidget(self.status_label)

        right_layout.addStretch()
        main_layout.addLayout(right_layout, 1)

    def init_signals(self):
        """ 连接信号与槽 (Signals & Slots) """
        self.pid_tuner.pid_changed.connect(self.update_pid)
        self.pid_tuner.p_on_e_changed.connect(self.change_p_on)
        self.pid_tuner.reverse_changed.connect(self.change_direction)

        self.mode_panel.mode_changed.connect(self.change_mode)
        self.mode_panel.manual_output_changed.connect(self.loop.set_manual_output)

        self.control_panel.run_toggled.connect(self.toggle_run)
        self.control_panel.record_toggled.connect(self.toggle_record)
        self.control_panel.setpoint_changed.connect(self.loop.set_setpoint)
        self.control_panel.reset_requested.connect(self.reset_plant)

    # ==========================
    # 槽函数 (Slots)
    # ==========================
    def sim_tick(self):
        """ 推进一次仿真并刷新显示 """
        computed = self.loop.advance(SimulationConfig.GUI_REFRESH_MS)

        # 只记录最后一次计算的状态（一个刷新周期内可能计算多次）
        if self.recorder and computed:
            self.recorder.log(self.pid.snapshot(), timestamp=self.loop.elapsed_ms / 1000.0)

        if self.pid.mode == Mode.AUTOMATIC:
            self.mode_panel.sync_output(self.loop.output.value)

        self.refresh_telemetry()

    def refresh_telemetry(self):
        snapshot = self.pid.snapshot()
        for key, label in self.telemetry_labels.items():
            value = snapshot[key]
            label.setText(f"{value:10.3f}" if isinstance(value, float) else str(value))

    @pyqtSlot(float, float, float)
    def update_pid(self, kp, ki, kd):
        """ 滑块调整 PID 参数 """
        self.pid.set_tunings(kp, ki, kd)
        logger.info("PID参数已更新", Kp=kp, Ki=ki, Kd=kd)
        self.status_label.setText(f"Kp={kp:.2f}, Ki={ki:.2f}, Kd={kd:.2f}")

    @pyqtSlot(bool)
    def change_p_on(self, p_on_e):
        p_on = ProportionalOn.ERROR if p_on_e else ProportionalOn.MEASUREMENT
        self.pid.set_tunings(self.pid.kp, self.pid.ki, self.pid.kd, p_on)
        self.status_label.setText(f"比例位置: {p_on.name}")
        self.refresh_telemetry()

    @pyqtSlot(bool)
    def change_direction(self, reverse):
        direction = Direction.REVERSE if reverse else Direction.DIRECT
        self.pid.set_controller_direction(direction)
        if self.pid.mode == Mode.MANUAL:
            # 手动模式下方向只记录，重新换算增益使其生效
            self.pid.set_tunings(self.pid.kp, self.pid.ki, self.pid.kd)
        self.status_label.setText(f"方向: {direction.name}")
        self.refresh_telemetry()

    @pyqtSlot(int)
    def change_mode(self, mode):
        self.pid.set_mode(Mode(mode))
        logger.info("模式已切换", mode=Mode(mode).name)
        self.status_label.setText(f"模式已切换: {Mode(mode).name}")
        self.refresh_telemetry()

    @pyqtSlot(bool)
    def toggle_run(self, running):
        if running:
            self.sim_timer.start(SimulationConfig.GUI_REFRESH_MS)
            self.status_label.setText("仿真运行中")
        else:
            self.sim_timer.stop()
            self.status_label.setText("仿真已暂停")

    @pyqtSlot(bool)
    def toggle_record(self, recording):
        if recording:
            self.recorder = DataRecorder("pid_session")
            self.status_label.setText(f"记录中: {self.recorder.filename}")
        elif self.recorder:
            self.recorder.close()
            self.status_label.setText(f"记录已保存: {self.recorder.filename}")
            self.recorder = None

    def reset_plant(self):
        self.loop.reset()
        self.mode_panel.rb_manual.setChecked(True)
        self.mode_panel.sync_output(self.loop.output.value)
        self.refresh_telemetry()
        self.status_label.setText("被控对象已重置")

    def closeEvent(self, event):
        self.sim_timer.stop()
        if self.recorder:
            self.recorder.close()
            self.recorder = None
        super().closeEvent(event)
