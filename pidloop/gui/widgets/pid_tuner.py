# -*- coding: utf-8 -*-
"""
PID 调参面板 (PID Tuning Panel)

⭐ 这是调试 PID 的核心组件！

[功能]
1. 实时调整 Kp、Ki、Kd 参数
2. 比例项位置 (P_ON_E / P_ON_M) 与控制方向设置
3. 重置为 PIDConfig 默认值

[使用技巧]
- 拖动滑块实时调参，观察右侧 P/I/D 分量
- 负增益不可能出现（滑块下限为 0）
- Ki 拉到 0 会清空积分和
"""

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QSlider, QPushButton, QCheckBox, QMessageBox
)
from PyQt6.QtCore import Qt, pyqtSignal

from ...config import PIDConfig

# 滑块整数值 -> 增益的缩放
SLIDER_SCALE = 100.0


class PIDTuner(QWidget):
    """PID 调参面板"""

    # 信号：PID 参数改变
    pid_changed = pyqtSignal(float, float, float)  # (kp, ki, kd)

    # 信号：比例项位置改变 (True = P_ON_E)
    p_on_e_changed = pyqtSignal(bool)

    # 信号：方向改变 (True = REVERSE)
    reverse_changed = pyqtSignal(bool)

    def __init__(self, initial_kp=PIDConfig.KP, initial_ki=PIDConfig.KI, initial_kd=PIDConfig.KD,
                 p_on_e=PIDConfig.P_ON_E, reverse=PIDConfig.REVERSE, parent=None):
        super().__init__(parent)

        self.kp = initial_kp
        self.ki = initial_ki
        self.kd = initial_kd

        self.init_ui(p_on_e, reverse)
        self.update_sliders()

    def init_ui(self, p_on_e, reverse):
        """初始化UI"""
        layout = QVBoxLayout(self)

        # 标题
        title = QLabel("<b>⚙️ PID 参数调节</b>")
        title.setStyleSheet("color: #4CAF50; font-size: 14px;")
        layout.addWidget(title)

        # ==========================
        # Kp / Ki / Kd 滑块
        # ==========================
        self.slider_kp, self.label_kp_val = self._add_slider(
            layout, "Kp:", 1000, "#FFA726", "↑ 比例项：响应速度（过大会震荡）")   # 0.00 - 10.00
        self.slider_ki, self.label_ki_val = self._add_slider(
            layout, "Ki:", 500, "#66BB6A", "↑ 积分项：消除稳态误差 (1/s)")        # 0.00 - 5.00
        self.slider_kd, self.label_kd_val = self._add_slider(
            layout, "Kd:", 200, "#42A5F5", "↑ 微分项：阻尼作用 (s)")              # 0.00 - 2.00

        layout.addSpacing(10)

        # ==========================
        # 模式设置
        # ==========================
        check_layout = QHBoxLayout()

        self.chk_p_on_e = QCheckBox("比例作用于误差 (P_ON_E)")
        self.chk_p_on_e.setChecked(p_on_e)
        self.chk_p_on_e.setToolTip("取消勾选则比例作用于测量值 (P_ON_M)")
        self.chk_p_on_e.toggled.connect(self.p_on_e_changed.emit)

        self.chk_reverse = QCheckBox("反向作用 (Reverse)")
        self.chk_reverse.setChecked(reverse)
        self.chk_reverse.toggled.connect(self.reverse_changed.emit)

        check_layout.addWidget(self.chk_p_on_e)
        check_layout.addWidget(self.chk_reverse)
        layout.addLayout(check_layout)

        layout.addSpacing(10)

        # ==========================
        # 按钮
        # ==========================
        self.btn_reset = QPushButton("🔄 重置默认 PID")
        self.btn_reset.clicked.connect(self._on_reset_clicked)
        layout.addWidget(self.btn_reset)

    def _add_slider(self, layout, name, maximum, color, hint):
        row = QHBoxLayout()
        row.addWidget(QLabel(name))

        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(0, maximum)
        slider.valueChanged.connect(self._on_slider_changed)
        row.addWidget(slider)

        label = QLabel("0.00")
        label.setMinimumWidth(50)
        label.setStyleSheet(f"color: {color}; font-weight: bold;")
        row.addWidget(label)
        layout.addLayout(row)

        hint_label = QLabel(hint)
        hint_label.setStyleSheet("color: gray; font-size: 10px;")
        layout.addWidget(hint_label)
        return slider, label

    def update_sliders(self):
        """更新滑块位置和显示"""
        # 阻止信号，避免setValue触发valueChanged导致值被覆盖
        for slider in (self.slider_kp, self.slider_ki, self.slider_kd):
            slider.blockSignals(True)

        self.slider_kp.setValue(round(self.kp * SLIDER_SCALE))
        self.slider_ki.setValue(round(self.ki * SLIDER_SCALE))
        self.slider_kd.setValue(round(self.kd * SLIDER_SCALE))

        for slider in (self.slider_kp, self.slider_ki, self.slider_kd):
            slider.blockSignals(False)

        self._update_labels()

    def _update_labels(self):
        self.label_kp_val.setText(f"{self.kp:.2f}")
        self.label_ki_val.setText(f"{self.ki:.2f}")
        self.label_kd_val.setText(f"{self.kd:.2f}")

    def _on_slider_changed(self):
        """滑块值改变"""
        self.kp = self.slider_kp.value() / SLIDER_SCALE
        self.ki = self.slider_ki.value() / SLIDER_SCALE
        self.kd = self.slider_kd.value() / SLIDER_SCALE

        self._update_labels()

        # 发射信号
        self.pid_changed.emit(self.kp, self.ki, self.kd)

    def _on_reset_clicked(self):
        """重置按钮点击"""
        reply = QMessageBox.question(
            self,
            "确认重置",
            f"是否重置为默认 PID 参数？\n\n"
            f"Kp={PIDConfig.KP:.2f}, Ki={PIDConfig.KI:.2f}, Kd={PIDConfig.KD:.2f}",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )

        if reply == QMessageBox.StandardButton.Yes:
            self.reset_to_defaults()

    def reset_to_defaults(self):
        """恢复 PIDConfig 默认值并通知控制器"""
        self.set_pid_values(PIDConfig.KP, PIDConfig.KI, PIDConfig.KD)
        self.chk_p_on_e.setChecked(PIDConfig.P_ON_E)
        self.chk_reverse.setChecked(PIDConfig.REVERSE)
        self.pid_changed.emit(self.kp, self.ki, self.kd)

    def set_pid_values(self, kp, ki, kd):
        """外部设置 PID 值（不发射信号）"""
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.update_sliders()
