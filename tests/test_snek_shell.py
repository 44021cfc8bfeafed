import unittest

from snek_shell import parse_shell_args, build_game
from snek_logic import GRID_WIDTH_LOGIC, MAX_TIME_TO_MOVE, TIME_TO_REACH_MAX_SPEED


class TestShellArguments(unittest.TestCase):
    def test_defaults(self):
        args = parse_shell_args([])
        game = build_game(args)
        self.assertEqual(game.width, GRID_WIDTH_LOGIC)
        self.assertAlmostEqual(game.clock.max_time, MAX_TIME_TO_MOVE)
        self.assertAlmostEqual(game.clock.ramp_time, TIME_TO_REACH_MAX_SPEED)

    def test_speed_flags_reach_the_game(self):
        args = parse_shell_args(["--width", "8", "--height", "6", "--seed", "3",
                                 "--max-time", "0.5", "--min-time", "0.2",
                                 "--ramp-time", "30"])
        game = build_game(args)
        self.assertEqual((game.width, game.height), (8, 6))
        self.assertAlmostEqual(game.clock.interval(0), 0.5)
        self.assertAlmostEqual(game.clock.interval(30), 0.2)
        self.assertAlmostEqual(game.clock.interval(15), 0.35)

    def test_invalid_speed_flags(self):
        args = parse_shell_args(["--max-time", "0.1", "--min-time", "0.2"])
        with self.assertRaises(ValueError):
            build_game(args)


if __name__ == '__main__':
    unittest.main()
