"""
tests/test_executor.py
=======================
Elevated Executor Tests

Tests verify:
    1. The argument list is [elevation..., program, args...]
    2. Exit code and combined stdout/stderr lines are captured
    3. A program that cannot be launched reports 127, not an exception

Scripts run from a temporary directory with elevation replaced by
nothing or by ``env``; no real privileges are needed.
"""

import os
import stat
import sys
import tempfile
import unittest

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from src.playback.executor import (
    COMMAND_NOT_FOUND_STATUS,
    ElevatedExecutor,
    ExecutionResult,
)


def _write_script(directory: str, name: str, body: str) -> str:
    path = os.path.join(directory, name)
    with open(path, "w") as fh:
        fh.write("#!/bin/sh\n" + body)
    os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class TestBuildArgv(unittest.TestCase):

    def test_default_uses_sudo(self):
        executor = ElevatedExecutor()
        self.assertEqual(
            executor.build_argv("/etc/asterisk/local/playaudio.sh", "test"),
            ["sudo", "/etc/asterisk/local/playaudio.sh", "test"],
        )

    def test_multi_word_elevation(self):
        executor = ElevatedExecutor(("sudo", "-n"))
        self.assertEqual(executor.build_argv("/bin/play", "x"), ["sudo", "-n", "/bin/play", "x"])

    def test_no_elevation(self):
        executor = ElevatedExecutor(())
        self.assertEqual(executor.build_argv("/bin/play", "x"), ["/bin/play", "x"])

    def test_argument_not_split_or_interpreted(self):
        executor = ElevatedExecutor()
        argv = executor.build_argv("/bin/play", "a b; rm -rf /")
        self.assertEqual(argv[-1], "a b; rm -rf /")
        self.assertEqual(len(argv), 3)


class TestRun(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def test_success(self):
        script = _write_script(self.tmpdir, "ok.sh", "echo \"playing $1\"\nexit 0\n")
        result = ElevatedExecutor(()).run(script, "test")
        self.assertTrue(result.succeeded)
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.output_lines, ["playing test"])

    def test_stderr_merged_into_output(self):
        script = _write_script(self.tmpdir, "busy.sh", "echo 'error: device busy' >&2\nexit 1\n")
        result = ElevatedExecutor(()).run(script, "test")
        self.assertFalse(result.succeeded)
        self.assertEqual(result.returncode, 1)
        self.assertEqual(result.output_lines, ["error: device busy"])

    def test_multiple_lines_trailing_whitespace_stripped(self):
        script = _write_script(self.tmpdir, "multi.sh", "echo 'one  '\necho two\nexit 3\n")
        result = ElevatedExecutor(()).run(script, "x")
        self.assertEqual(result.returncode, 3)
        self.assertEqual(result.output_lines, ["one", "two"])

    def test_argument_passed_verbatim(self):
        script = _write_script(self.tmpdir, "echoarg.sh", "printf '%s\\n' \"$1\"\n")
        result = ElevatedExecutor(()).run(script, "a b;c")
        self.assertEqual(result.output_lines, ["a b;c"])

    def test_elevation_prefix_is_executed(self):
        script = _write_script(self.tmpdir, "ok.sh", "echo \"got $1\"\n")
        result = ElevatedExecutor(("env",)).run(script, "test")
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.output_lines, ["got test"])

    def test_missing_elevation_command(self):
        result = ElevatedExecutor(("no-such-elevation-command-xyz",)).run("/bin/true")
        self.assertEqual(result.returncode, COMMAND_NOT_FOUND_STATUS)
        self.assertEqual(result.output_lines, ["no-such-elevation-command-xyz: command not found"])


class TestExecutionResult(unittest.TestCase):

    def test_default_output_empty(self):
        self.assertEqual(ExecutionResult(0).output_lines, [])

    def test_succeeded_only_on_zero(self):
        self.assertTrue(ExecutionResult(0).succeeded)
        self.assertFalse(ExecutionResult(2).succeeded)


if __name__ == "__main__":
    unittest.main()
