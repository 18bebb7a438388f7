import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest import mock

import serve


class TestServeStartup(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "pdfs").mkdir()
        (self.root / "pdfs" / "a.txt").write_text("cat dog", encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()

    def run_main(self, *args, env=None):
        err = io.StringIO()
        argv = ["serve.py", "--corpus", str(self.root / "pdfs"), *args]
        with mock.patch.object(sys, "argv", argv), \
                mock.patch.dict(os.environ, env or {}), \
                mock.patch.object(serve, "serve") as fake_serve, \
                redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                serve.main()
        fake_serve.assert_not_called()
        return ctx.exception.code, err.getvalue()

    def test_undecodable_stop_words_exit_with_diagnostic(self):
        stop = self.root / "stop.txt"
        stop.write_bytes(b"\x98\n")
        code, err = self.run_main("--stop-words", str(stop))
        self.assertEqual(code, 1)
        self.assertIn("Cannot build index", err)
        self.assertNotIn("Traceback", err)

    def test_missing_corpus_exits_with_diagnostic(self):
        stop = self.root / "stop.txt"
        stop.write_text("the\n", encoding="utf-8")
        argv = ["serve.py", "--corpus", str(self.root / "nope"), "--stop-words", str(stop)]
        err = io.StringIO()
        with mock.patch.object(sys, "argv", argv), redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                serve.main()
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Cannot build index", err.getvalue())

    def test_out_of_range_port_is_a_usage_error(self):
        code, err = self.run_main("--port", "70000")
        self.assertEqual(code, 2)
        self.assertIn("Port out of range", err)

    def test_unknown_log_level_is_a_usage_error(self):
        code, err = self.run_main("--log-level", "loud")
        self.assertEqual(code, 2)
        self.assertIn("Unknown log level", err)

    def test_bad_port_in_environment(self):
        code, err = self.run_main(env={"PAGESEARCH_PORT": "http"})
        self.assertEqual(code, 1)
        self.assertIn("Invalid configuration", err)


if __name__ == "__main__":
    unittest.main()
