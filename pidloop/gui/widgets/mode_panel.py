# -*- coding: utf-8 -*-
"""
模式选择面板 (Mode Selection Panel)

两种模式：
1. 手动 (MANUAL)    - 控制器不计算，输出由下方滑块直接给定
2. 自动 (AUTOMATIC) - PID 闭环控制

从手动切到自动时控制器以当前输出为积分初值，实现无扰切换。
"""

from PyQt6.QtWidgets import (
    QGroupBox, QVBoxLayout, QHBoxLayout, QRadioButton,
    QButtonGroup, QSlider, QLabel
)
from PyQt6.QtCore import Qt, pyqtSignal

from ...core.modes import Mode


class ModePanel(QGroupBox):
    """模式选择面板"""

    # 信号：模式改变
    mode_changed = pyqtSignal(int)           # Mode.MANUAL / Mode.AUTOMATIC

    # 信号：手动输出改变
    manual_output_changed = pyqtSignal(float)

    def __init__(self, output_limits=(0.0, 255.0), parent=None):
        super().__init__("工作模式 (Mode)", parent)
        self.output_limits = output_limits
        self.init_ui()

    def init_ui(self):
        """初始化UI"""
        layout = QVBoxLayout(self)

        # 按钮组
        self.mode_group = QButtonGroup(self)

        self.rb_manual = QRadioButton("手动 (Manual)")
        self.rb_auto = QRadioButton("自动 (Automatic)")
        self.rb_manual.setChecked(True)

        self.mode_group.addButton(self.rb_manual, int(Mode.MANUAL))
        self.mode_group.addButton(self.rb_auto, int(Mode.AUTOMATIC))

        # 连接信号
        self.mode_group.idToggled.connect(self._on_mode_toggled)

        layout.addWidget(self.rb_manual)
        layout.addWidget(self.rb_auto)

        # 手动输出滑块
        out_layout = QHBoxLayout()
        out_layout.addWidget(QLabel("输出:"))

        self.slider_output = QSlider(Qt.Orientation.Horizontal)
        self.slider_output.setRange(int(self.output_limits[0]), int(self.output_limits[1]))
        self.slider_output.valueChanged.connect(self._on_output_changed)
        out_layout.addWidget(self.slider_output)

        self.label_output_val = QLabel(f"{self.slider_output.value()}")
        self.label_output_val.setMinimumWidth(40)
        out_layout.addWidget(self.label_output_val)
        layout.addLayout(out_layout)

    def _on_mode_toggled(self, btn_id, checked):
        """模式切换处理"""
        if not checked:
            return

        mode = Mode(btn_id)
        self.slider_output.setEnabled(mode == Mode.MANUAL)

        # 发射信号
        self.mode_changed.emit(int(mode))

    def _on_output_changed(self, value):
        self.label_output_val.setText(f"{value}")
        self.manual_output_changed.emit(float(value))

    def sync_output(self, value):
        """自动模式下让滑块跟随实际输出，切回手动时不跳变"""
        self.slider_output.blockSignals(True)
        self.slider_output.setValue(int(round(value)))
        self.slider_output.blockSignals(False)
        self.label_output_val.setText(f"{int(round(value))}")
