from __future__ import annotations

import contextlib
import importlib.util
import io
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


class _SourceFileMixin:
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write_source(self, text: str, name: str = "program.nl") -> Path:
        path = self.tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for engine tests")
class EngineSurfaceTests(_SourceFileMixin, unittest.TestCase):
    def test_engine_runs_source_text(self) -> None:
        from newlang import Engine

        self.assertEqual(Engine("foo: 5, bar: 2 * foo, bar + foo").run(), 15.0)

    def test_engine_run_is_repeatable(self) -> None:
        from newlang import Engine

        engine = Engine("a: 1, b: a + 1, b")
        self.assertEqual(engine.run(), 2.0)
        self.assertEqual(engine.run(), 2.0)

    def test_engine_parse_exposes_program(self) -> None:
        from newlang import Engine
        from newlang.ast import Program

        program = Engine("1, 2").parse()
        self.assertIsInstance(program, Program)
        self.assertEqual(len(program.commands), 2)

    def test_engine_parse_is_memoised(self) -> None:
        from newlang import Engine
        from newlang import evaluator

        engine = Engine("x: 4, x / 2")
        self.assertIs(engine.parse(), engine.parse())
        self.assertIs(Engine("x: 4, x / 2").parse(), engine.parse())
        self.assertFalse(hasattr(evaluator, "parse_program_cached"))

    def test_engine_rejects_empty_source(self) -> None:
        from newlang import Engine, ParseError

        with self.assertRaises(ParseError):
            Engine("").run()

    def test_from_source_path_normalizes_line_endings(self) -> None:
        from newlang import Engine

        path = self.write_source("foo: 5,\r\nbar: 2 * foo,\rbar + foo\r\n")
        engine = Engine.from_source_path(path)
        self.assertNotIn("\r", engine.code)
        self.assertEqual(engine.code, "foo: 5,\nbar: 2 * foo,\nbar + foo\n")
        self.assertEqual(engine.run(), 15.0)

    def test_from_source_path_accepts_str(self) -> None:
        from newlang import Engine

        path = self.write_source("7")
        self.assertEqual(Engine.from_source_path(str(path)).run(), 7.0)

    def test_missing_file_raises_source_file_error(self) -> None:
        from newlang import Engine, SourceFileError

        missing = self.tmp_path / "missing.nl"
        with self.assertRaises(SourceFileError) as ctx:
            Engine.from_source_path(missing)
        self.assertEqual(ctx.exception.context, {"path": os.fspath(missing)})
        self.assertIn("Input file is invalid", str(ctx.exception))

    def test_directory_is_not_a_source_file(self) -> None:
        from newlang import Engine, SourceFileError

        with self.assertRaises(SourceFileError):
            Engine.from_source_path(self.tmp_path)

    def test_engine_logs_at_debug(self) -> None:
        from newlang import Engine

        path = self.write_source("1 + 1")
        with self.assertLogs("newlang.engine", level="DEBUG") as logs:
            Engine.from_source_path(path).run()
        joined = "\n".join(logs.output)
        self.assertIn("Loaded 5 characters", joined)
        self.assertIn("Parsed 1 command(s)", joined)
        self.assertIn("Evaluated to 2.0", joined)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for cli tests")
class CommandLineTests(_SourceFileMixin, unittest.TestCase):
    def test_main_runs_file_and_discards_result(self) -> None:
        from newlang.cli import main

        path = self.write_source("5, 6, 7")
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = main([str(path)])
        self.assertEqual(code, 0)
        self.assertEqual(stdout.getvalue(), "")

    def test_main_print_flag_writes_result(self) -> None:
        from newlang.cli import main

        path = self.write_source("1 + 10 / 2 * 2")
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = main([str(path), "--print"])
        self.assertEqual(code, 0)
        self.assertEqual(stdout.getvalue().strip(), "11.0")

    def test_main_reports_missing_file(self) -> None:
        from newlang.cli import main

        with self.assertLogs("newlang.cli", level="ERROR") as logs:
            code = main([str(self.tmp_path / "nope.nl")])
        self.assertEqual(code, 1)
        self.assertIn("Input file is invalid", logs.output[0])

    def test_main_reports_runtime_error(self) -> None:
        from newlang.cli import main

        path = self.write_source("foo: 1, foo: 2, foo")
        with self.assertLogs("newlang.cli", level="ERROR") as logs:
            code = main([str(path)])
        self.assertEqual(code, 1)
        self.assertIn("already declared", logs.output[0])

    def test_main_requires_exactly_one_input(self) -> None:
        from newlang.cli import main

        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([])
        self.assertEqual(ctx.exception.code, 2)

    def test_module_entry_point(self) -> None:
        path = self.write_source("2 * 21")
        src = Path(__file__).resolve().parents[1] / "src"
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(src), env.get("PYTHONPATH")]))
        proc = subprocess.run(
            [sys.executable, "-m", "newlang", str(path), "--print"],
            capture_output=True,
            text=True,
            env=env,
            check=False,
        )
        self.assertEqual(proc.returncode, 0, proc.stderr)
        self.assertEqual(proc.stdout.strip(), "42.0")


if __name__ == "__main__":
    unittest.main()
