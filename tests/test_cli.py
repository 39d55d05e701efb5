import io
import unittest
from contextlib import redirect_stdout
from unittest import mock

from emoji_core import cli


def run_cli(argv, inputs):
    out = io.StringIO()
    with mock.patch("builtins.input", side_effect=list(inputs)), redirect_stdout(out):
        code = cli.main(argv)
    return code, out.getvalue()


class TestCli(unittest.TestCase):
    def test_given_list_flag_when_run_then_prints_categories(self):
        code, out = run_cli(["--list-categories"], [])
        self.assertEqual(code, 0)
        self.assertIn("animals:", out)
        self.assertIn("food:", out)

    def test_given_winning_inputs_when_played_then_announces_winner(self):
        code, out = run_cli(["--seed", "1"], ["0", "3", "1", "4", "2"])
        self.assertEqual(code, 0)
        self.assertIn("Player 1 wins!", out)

    def test_given_bad_and_taken_cells_when_entered_then_reprompts(self):
        code, out = run_cli([], ["x", "12", "4", "4", "q"])
        self.assertEqual(code, 0)
        self.assertIn("Could not parse", out)
        self.assertIn("Cells are 0-8", out)
        self.assertIn("not available", out)

    def test_given_reset_command_when_entered_then_board_starts_over(self):
        code, out = run_cli(["--p1", "space", "--p2", "sports"], ["4", "r", "q"])
        self.assertEqual(code, 0)
        self.assertIn("Player 1 (space): 1/3", out)
        self.assertEqual(out.count("Player 1 (space): 0/3"), 2)

    def test_given_unknown_category_when_run_then_exits_with_usage_error(self):
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--p1", "nope"])
        self.assertEqual(ctx.exception.code, 2)

    def test_given_unknown_log_level_when_run_then_exits_with_usage_error(self):
        with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--log-level", "LOUD"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("--log-level", err.getvalue())

    def test_given_lowercase_log_level_when_run_then_accepted(self):
        code, out = run_cli(["--log-level", "debug", "--list-categories"], [])
        self.assertEqual(code, 0)
        self.assertIn("animals:", out)


if __name__ == "__main__":
    unittest.main(verbosity=2)
