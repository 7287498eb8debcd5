import os
import unittest
from unittest.mock import patch

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pidloop.config import PIDConfig
from pidloop.core import ClosedLoop, Direction, FirstOrderPlant, Mode, ProportionalOn
from pidloop.gui import MainWindow


class MainWindowTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self):
        self.loop = ClosedLoop(plant=FirstOrderPlant(gain=1.0, time_constant=2.0), setpoint=50.0, tick_ms=10)
        self.window = MainWindow(loop=self.loop)
        self.pid = self.window.pid

    def tearDown(self):
        self.window.close()

    def test_sliders_update_tunings(self):
        self.window.pid_tuner.slider_kp.setValue(350)
        self.window.pid_tuner.slider_kd.setValue(0)
        self.assertAlmostEqual(self.pid.kp, 3.5)
        self.assertAlmostEqual(self.pid.kd, 0.0)

    def test_mode_panel_switches_controller_mode(self):
        self.window.mode_panel.rb_auto.setChecked(True)
        self.assertEqual(self.pid.mode, Mode.AUTOMATIC)
        self.assertFalse(self.window.mode_panel.slider_output.isEnabled())

        self.window.mode_panel.rb_manual.setChecked(True)
        self.assertEqual(self.pid.mode, Mode.MANUAL)

    def test_manual_output_slider_drives_output(self):
        self.window.mode_panel.slider_output.setValue(42)
        self.assertEqual(self.loop.output.value, 42.0)

    def test_checkboxes_change_direction_and_proportional_mode(self):
        self.window.pid_tuner.chk_reverse.setChecked(True)
        self.assertEqual(self.pid.direction, Direction.REVERSE)
        self.assertLess(self.pid.scaled_gains[0], 0.0)

        self.window.pid_tuner.chk_p_on_e.setChecked(False)
        self.assertEqual(self.pid.p_on, ProportionalOn.MEASUREMENT)

    def test_sim_tick_advances_loop_and_telemetry(self):
        self.window.mode_panel.rb_auto.setChecked(True)
        self.window.sim_tick()
        self.assertGreater(self.loop.elapsed_ms, 0)
        self.assertGreater(self.loop.output.value, 0.0)
        self.assertEqual(self.window.telemetry_labels['mode'].text(), "AUTOMATIC")

    def test_setpoint_slider_and_reset(self):
        self.window.control_panel.slider_setpoint.setValue(30)
        self.assertEqual(self.loop.setpoint.value, 30.0)

        self.window.mode_panel.rb_auto.setChecked(True)
        self.window.sim_tick()
        self.window.control_panel.btn_reset.click()
        self.assertEqual(self.pid.mode, Mode.MANUAL)
        self.assertTrue(self.window.mode_panel.rb_manual.isChecked())
        self.assertEqual(self.loop.elapsed_ms, 0)

    def test_record_toggle_logs_snapshots(self):
        with patch("pidloop.gui.main_window.DataRecorder") as recorder_cls:
            recorder = recorder_cls.return_value
            self.window.control_panel.btn_record.setChecked(True)
            self.window.mode_panel.rb_auto.setChecked(True)
            self.window.sim_tick()
            self.window.control_panel.btn_record.setChecked(False)

        recorder_cls.assert_called_once_with("pid_session")
        recorder.log.assert_called()
        recorder.close.assert_called_once()
        self.assertIsNone(self.window.recorder)

    def test_reset_to_defaults_emits_tunings(self):
        self.window.pid_tuner.slider_kp.setValue(900)
        self.assertAlmostEqual(self.pid.kp, 9.0)
        self.window.pid_tuner.reset_to_defaults()
        self.assertAlmostEqual(self.pid.kp, PIDConfig.KP)


if __name__ == "__main__":
    unittest.main()
