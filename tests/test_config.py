import argparse
import logging
import unittest
from pathlib import Path

from pagesearch.config import (
    DEFAULT_PORT,
    Settings,
    configure_logging,
    parse_log_level,
    parse_port,
    port_arg,
)
from pagesearch.errors import ConfigurationError


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        settings = Settings.from_env({})
        self.assertEqual(settings.port, DEFAULT_PORT)
        self.assertEqual(settings.corpus_dir, Path("pdfs"))
        self.assertEqual(settings.stop_words, Path("stop-ru.txt"))

    def test_env_overrides(self):
        settings = Settings.from_env({
            "PAGESEARCH_CORPUS_DIR": "docs",
            "PAGESEARCH_STOP_WORDS": "stop-en.txt",
            "PAGESEARCH_HOST": "0.0.0.0",
            "PAGESEARCH_PORT": "9000",
            "PAGESEARCH_LOG_LEVEL": "debug",
        })
        self.assertEqual(settings.corpus_dir, Path("docs"))
        self.assertEqual(settings.stop_words, Path("stop-en.txt"))
        self.assertEqual(settings.host, "0.0.0.0")
        self.assertEqual(settings.port, 9000)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_bad_port(self):
        with self.assertRaises(ConfigurationError):
            Settings.from_env({"PAGESEARCH_PORT": "http"})
        with self.assertRaises(ConfigurationError):
            parse_port("70000")

    def test_configure_logging(self):
        configure_logging("warning")
        logger = logging.getLogger("pagesearch")
        self.assertEqual(logger.level, logging.WARNING)
        self.assertEqual(len(logger.handlers), 1)

    def test_unknown_log_level(self):
        self.assertEqual(parse_log_level(" debug "), "DEBUG")
        with self.assertRaises(ConfigurationError):
            parse_log_level("loud")
        with self.assertRaises(ConfigurationError):
            configure_logging("loud")
        with self.assertRaises(ConfigurationError):
            Settings.from_env({"PAGESEARCH_LOG_LEVEL": "loud"})

    def test_port_arg_reports_argparse_error(self):
        self.assertEqual(port_arg("9000"), 9000)
        with self.assertRaises(argparse.ArgumentTypeError):
            port_arg("70000")


if __name__ == "__main__":
    unittest.main()
