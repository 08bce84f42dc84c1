"""Tests for the structlog configuration."""

import importlib
import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

import src.subparser.logging as subparser_logging


class TestDefaultLogging(unittest.TestCase):
    def tearDown(self):
        importlib.reload(subparser_logging)

    def test_default_writes_warnings_to_stderr(self):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            importlib.reload(subparser_logging)
            log = subparser_logging.get_logger("subparser.test")
            log.debug("fragment_parsed", date="13.10.2023")
            log.info("plans_parsed", plans=1)
            log.warning("created_at_unparsed", date="13.10.2023")

        self.assertEqual(out.getvalue(), "")
        self.assertIn("created_at_unparsed", err.getvalue())
        self.assertNotIn("fragment_parsed", err.getvalue())
        self.assertNotIn("plans_parsed", err.getvalue())


class TestSetupLogging(unittest.TestCase):
    def tearDown(self):
        importlib.reload(subparser_logging)

    def test_json_lines_on_stderr(self):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            subparser_logging.setup_logging(json_output=True, log_level="DEBUG")
            subparser_logging.get_logger("subparser.test").debug("documents_split", fragments=2)

        self.assertEqual(out.getvalue(), "")
        self.assertIn('"event": "documents_split"', err.getvalue())
        self.assertIn('"fragments": 2', err.getvalue())


if __name__ == "__main__":
    unittest.main()
