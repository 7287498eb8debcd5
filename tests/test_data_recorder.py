import csv
import tempfile
import unittest
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from pidloop.core import Cell, ManualClock, Mode, PIDController
from pidloop.utils import DataRecorder, QuickPlotter


class DataRecorderTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.clock = ManualClock()
        self.inp, self.out, self.sp = Cell(0.0), Cell(0.0), Cell(10.0)
        self.pid = PIDController(self.inp, self.out, self.sp, 2.0, 1.0, 0.0, clock=self.clock)
        self.pid.set_mode(Mode.AUTOMATIC)

    def tearDown(self):
        self.tmp.cleanup()

    def run_samples(self, recorder, count):
        for i in range(count):
            self.pid.step()
            recorder.log(self.pid.snapshot(), timestamp=i * 0.1)
            self.clock.advance(100)
            self.inp.value += 1.0

    def read_rows(self, path):
        with open(path, newline='', encoding='utf-8') as f:
            return list(csv.DictReader(f))

    def test_rows_are_written_on_close(self):
        with DataRecorder("unit", log_dir=self.tmp.name) as recorder:
            self.run_samples(recorder, 3)
            self.assertFalse(recorder.filename.exists())

        rows = self.read_rows(recorder.filename)
        self.assertEqual(len(rows), 3)
        self.assertEqual(list(rows[0].keys()), DataRecorder.FIELDNAMES)
        self.assertEqual(rows[0]['timestamp'], "0.000")
        self.assertEqual(rows[0]['mode'], "AUTOMATIC")
        self.assertAlmostEqual(float(rows[0]['p_part']), 20.0)
        self.assertAlmostEqual(float(rows[0]['setpoint']), 10.0)

    def test_auto_save_appends_without_duplicate_header(self):
        recorder = DataRecorder("auto", auto_save_interval=2, log_dir=self.tmp.name)
        self.run_samples(recorder, 2)
        self.assertTrue(recorder.filename.exists())
        self.assertEqual(recorder.buffer, [])

        self.run_samples(recorder, 3)
        recorder.close()

        rows = self.read_rows(recorder.filename)
        self.assertEqual(len(rows), 5)
        self.assertEqual(recorder.record_count, 5)

    def test_plot_csv_saves_png(self):
        with DataRecorder("plot", log_dir=self.tmp.name) as recorder:
            self.run_samples(recorder, 5)

        fig = QuickPlotter.plot_csv(recorder.filename, show_plot=False, save_fig=True)
        self.assertEqual(len(fig.axes), 3)
        self.assertTrue(Path(recorder.filename).with_suffix('.png').exists())
        plt.close(fig)


if __name__ == "__main__":
    unittest.main()
