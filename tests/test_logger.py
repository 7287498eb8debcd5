import unittest

from pidloop.utils.logger import Logger


class LoggerTests(unittest.TestCase):
    def test_format_message_appends_key_values(self):
        self.assertEqual(Logger._format_message("hello", {}), "hello")
        self.assertEqual(
            Logger._format_message("rejected", {"kp": -1.0, "ki": 2}),
            "rejected (kp=-1.0, ki=2)"
        )

    def test_loggers_live_under_project_namespace(self):
        logger = Logger("Unit")
        with self.assertLogs("pidloop.Unit", level="INFO") as captured:
            logger.info("ready", port=3)
        self.assertEqual(captured.records[0].getMessage(), "ready (port=3)")

    def test_setup_runs_once(self):
        Logger("A")
        Logger("B")
        self.assertTrue(Logger._initialized)


if __name__ == "__main__":
    unittest.main()
