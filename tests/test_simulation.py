import unittest

import numpy as np

from pidloop.core import ClosedLoop, FirstOrderPlant, Mode, ManualClock


def quiet_loop(**kwargs):
    plant = FirstOrderPlant(gain=1.0, time_constant=2.0, noise_std=0.0)
    return ClosedLoop(plant=plant, setpoint=50.0, tick_ms=10, **kwargs)


class FirstOrderPlantTests(unittest.TestCase):
    def test_update_integrates_towards_gain_times_input(self):
        plant = FirstOrderPlant(gain=1.0, time_constant=1.0)
        self.assertAlmostEqual(plant.update(1.0, 0.1), 0.1)
        for _ in range(200):
            plant.update(1.0, 0.1)
        self.assertAlmostEqual(plant.state, 1.0, places=3)

    def test_noise_is_reproducible_with_seed(self):
        a = FirstOrderPlant(noise_std=0.5, seed=7)
        b = FirstOrderPlant(noise_std=0.5, seed=7)
        self.assertEqual([a.measure() for _ in range(5)], [b.measure() for _ in range(5)])
        self.assertEqual(a.state, 0.0)

    def test_reset_restores_initial_state(self):
        plant = FirstOrderPlant(initial=3.0)
        plant.update(10.0, 0.5)
        plant.reset()
        self.assertEqual(plant.state, 3.0)


class ClosedLoopTests(unittest.TestCase):
    def test_manual_mode_does_not_compute(self):
        loop = quiet_loop()
        self.assertEqual(loop.advance(1000), 0)
        self.assertEqual(loop.output.value, 0.0)
        t, sp, pv, out = loop.history()
        self.assertEqual(len(t), 0)

    def test_controller_runs_once_per_sample_period(self):
        loop = quiet_loop()
        loop.controller.set_mode(Mode.AUTOMATIC)
        self.assertEqual(loop.advance(1000), 10)
        t, sp, pv, out = loop.history()
        self.assertEqual(len(t), 10)
        self.assertTrue(np.all(np.diff(t) > 0))

    def test_step_response_settles_on_setpoint(self):
        loop = quiet_loop()
        loop.controller.set_mode(Mode.AUTOMATIC)
        t, sp, pv, out = loop.run(60_000)

        self.assertAlmostEqual(loop.input.value, 50.0, delta=1.0)
        lo, hi = loop.controller.output_limits
        self.assertTrue(np.all(out >= lo))
        self.assertTrue(np.all(out <= hi))

    def test_partial_ticks_carry_over(self):
        clock = ManualClock()
        loop = quiet_loop(clock=clock)
        loop.advance(5)
        self.assertEqual(loop.elapsed_ms, 0)
        loop.advance(25)
        self.assertEqual(loop.elapsed_ms, 30)
        loop.advance(4)
        loop.advance(4)
        self.assertEqual(loop.elapsed_ms, 30)
        loop.advance(2)
        self.assertEqual(loop.elapsed_ms, 40)
        self.assertEqual(clock(), 40)

    def test_manual_output_only_applies_in_manual(self):
        loop = quiet_loop()
        loop.set_manual_output(80.0)
        self.assertEqual(loop.output.value, 80.0)

        loop.controller.set_mode(Mode.AUTOMATIC)
        loop.advance(100)
        computed = loop.output.value
        loop.set_manual_output(5.0)
        self.assertEqual(loop.output.value, computed)

    def test_switch_to_automatic_is_bumpless(self):
        loop = quiet_loop()
        loop.set_manual_output(50.0)
        loop.run(30_000)  # plant settles at 50 with output 50
        self.assertAlmostEqual(loop.input.value, 50.0, delta=0.1)

        loop.controller.set_mode(Mode.AUTOMATIC)
        loop.advance(10)
        self.assertAlmostEqual(loop.output.value, 50.0, delta=0.5)

    def test_reset_returns_to_manual_and_clears_history(self):
        loop = quiet_loop()
        loop.controller.set_mode(Mode.AUTOMATIC)
        loop.run(2000)
        loop.reset()

        self.assertEqual(loop.controller.mode, Mode.MANUAL)
        self.assertEqual(loop.output.value, 0.0)
        self.assertEqual(loop.input.value, 0.0)
        self.assertEqual(loop.elapsed_ms, 0)
        self.assertEqual(len(loop.history()[0]), 0)

    def test_custom_config_and_clock(self):
        class Config:
            KP, KI, KD = 1.0, 0.0, 0.0
            P_ON_E = True
            REVERSE = False
            SAMPLE_TIME_MS = 50
            FILTER_ALPHA = 0.9
            OUTPUT_MIN, OUTPUT_MAX = -20.0, 20.0
            INTEGRATOR_MIN, INTEGRATOR_MAX = -5.0, 5.0

        clock = ManualClock(5000)
        loop = ClosedLoop(plant=FirstOrderPlant(), setpoint=10.0, tick_ms=10, clock=clock, config=Config)
        self.assertEqual(loop.controller.sample_time, 50)
        self.assertEqual(loop.controller.output_limits, (-20.0, 20.0))

        loop.controller.set_mode(Mode.AUTOMATIC)
        self.assertEqual(loop.advance(500), 10)
        self.assertEqual(clock(), 5500)


if __name__ == "__main__":
    unittest.main()
