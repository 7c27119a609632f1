import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from donor_match import cli


class TestCli(unittest.TestCase):
    def _run(self, argv):
        out = io.StringIO()
        with mock.patch.object(
            cli, "configure_logging", return_value=cli.WarningBufferHandler()
        ), redirect_stdout(out):
            cli.main(argv)
        return out.getvalue()

    def test_match_command(self) -> None:
        output = self._run(["match", "東亞", "東亞銀行"])
        self.assertIn('"東亞" vs "東亞銀行": MATCH (direct)', output)

    def test_match_explain(self) -> None:
        output = self._run(["match", "東亞", "東亞銀行", "--explain"])
        self.assertIn("existing: normalized='東亞'", output)
        self.assertIn("existing: cores=['東亞']", output)

    def test_match_command_exit_code_on_no_match(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run(["match", "張柏芝", "張智霖"])
        self.assertEqual(ctx.exception.code, 1)

    def test_check_command(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "cases.yaml"
            path.write_text(
                '- ["東亞", "東亞銀行", true]\n- ["中國燃氣（0384）", "中國宏橋", false]\n',
                encoding="utf-8",
            )
            output = self._run(["check", str(path), "--symmetric"])
        self.assertIn("Results: 4 passed, 0 failed", output)

    def test_check_command_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "cases.yaml"
            path.write_text('- ["張柏芝", "張智霖", true]\n', encoding="utf-8")
            with self.assertRaises(SystemExit) as ctx:
                self._run(["check", str(path)])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
