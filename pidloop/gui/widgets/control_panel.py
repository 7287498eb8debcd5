# -*- coding: utf-8 -*-
"""
控制按钮面板 (Control Panel)

包含：
- 运行/暂停仿真
- 设定值滑块
- 开始/停止数据记录
- 重置被控对象
"""

from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QSlider, QLabel
from PyQt6.QtCore import Qt, pyqtSignal

from ...config import SimulationConfig


class ControlPanel(QWidget):
    """控制按钮面板"""

    # 信号
    run_toggled = pyqtSignal(bool)          # 仿真运行开关
    record_toggled = pyqtSignal(bool)       # 数据记录开关
    setpoint_changed = pyqtSignal(float)    # 设定值
    reset_requested = pyqtSignal()          # 重置被控对象

    def __init__(self, setpoint=SimulationConfig.SETPOINT, parent=None):
        super().__init__(parent)
        self.init_ui(setpoint)

    def init_ui(self, setpoint):
        """初始化UI"""
        layout = QVBoxLayout(self)

        # 设定值
        sp_layout = QHBoxLayout()
        sp_layout.addWidget(QLabel("设定值:"))
        self.slider_setpoint = QSlider(Qt.Orientation.Horizontal)
        self.slider_setpoint.setRange(*SimulationConfig.SETPOINT_RANGE)
        self.slider_setpoint.setValue(int(setpoint))
        self.slider_setpoint.valueChanged.connect(self._on_setpoint_changed)
        sp_layout.addWidget(self.slider_setpoint)
        self.label_setpoint_val = QLabel(f"{int(setpoint)}")
        self.label_setpoint_val.setMinimumWidth(40)
        sp_layout.addWidget(self.label_setpoint_val)
        layout.addLayout(sp_layout)

        btn_layout = QHBoxLayout()

        # 运行/暂停按钮
        self.btn_run = QPushButton("运行仿真 (Run)")
        self.btn_run.setCheckable(True)
        self.btn_run.setStyleSheet(
            "background-color: #444; color: white; padding: 8px;"
        )
        self.btn_run.toggled.connect(self._on_run_toggled)
        btn_layout.addWidget(self.btn_run)

        # 记录按钮
        self.btn_record = QPushButton("记录数据 (Record)")
        self.btn_record.setCheckable(True)
        self.btn_record.setToolTip("把控制器状态写入 logs/*.csv")
        self.btn_record.toggled.connect(self.record_toggled.emit)
        btn_layout.addWidget(self.btn_record)

        # 重置按钮
        self.btn_reset = QPushButton("重置对象 (Reset)")
        self.btn_reset.setToolTip("被控对象回到初始状态，控制器切回手动")
        self.btn_reset.clicked.connect(self.reset_requested.emit)
        btn_layout.addWidget(self.btn_reset)

        layout.addLayout(btn_layout)

    def _on_setpoint_changed(self, value):
        self.label_setpoint_val.setText(f"{value}")
        self.setpoint_changed.emit(float(value))

    def _on_run_toggled(self, checked):
        """运行开关切换"""
        if checked:
            self.btn_run.setText("暂停仿真 (Pause)")
            self.btn_run.setStyleSheet(
                "background-color: #d9534f; color: white; "
                "font-weight: bold; padding: 8px;"
            )
        else:
            self.btn_run.setText("运行仿真 (Run)")
            self.btn_run.setStyleSheet(
                "background-color: #444; color: white; padding: 8px;"
            )

        self.run_toggled.emit(checked)
