import unittest

from blockfall.game import GameMode, MODE_SETTINGS, calculate_score, drop_interval_ms, line_clear_name
from blockfall.game.modes import apply_mode_multiplier, is_completed, recompute_level
from blockfall.game.stats import format_time, grade
from blockfall.game.state import LineClearStats


class ScoringTests(unittest.TestCase):
    def test_base_table_with_level_bonus(self):
        self.assertEqual(calculate_score(1, 1), 110)
        self.assertEqual(calculate_score(2, 1), 330)
        self.assertEqual(calculate_score(3, 1), 550)
        self.assertEqual(calculate_score(4, 1), 880)
        self.assertEqual(calculate_score(1, 0), 100)

    def test_zero_lines_scores_nothing(self):
        self.assertEqual(calculate_score(0, 5, combo=3), 0)

    def test_t_spin_values(self):
        self.assertEqual(calculate_score(1, 0, is_t_spin=True), 800)
        self.assertEqual(calculate_score(2, 0, is_t_spin=True), 1200)
        self.assertEqual(calculate_score(3, 0, is_t_spin=True), 1600)
        # no T-spin variant for four lines
        self.assertEqual(calculate_score(4, 0, is_t_spin=True), 800)

    def test_back_to_back_only_for_special_clears(self):
        self.assertEqual(calculate_score(4, 1, is_back_to_back=True), 1320)
        self.assertEqual(calculate_score(2, 0, is_back_to_back=True), 300)
        self.assertEqual(calculate_score(1, 0, is_t_spin=True, is_back_to_back=True), 1200)

    def test_combo_bonus(self):
        self.assertEqual(calculate_score(1, 0, combo=2), 200)
        self.assertEqual(calculate_score(1, 1, combo=1), 165)

    def test_perfect_clear_short_circuits(self):
        self.assertEqual(calculate_score(4, 2, is_back_to_back=True, combo=5, is_perfect_clear=True), 3600)
        self.assertEqual(calculate_score(1, 1, is_perfect_clear=True), 3300)

    def test_line_clear_names(self):
        self.assertEqual(line_clear_name(4), "Tetris")
        self.assertEqual(line_clear_name(2, True), "T-Spin Double")
        self.assertEqual(line_clear_name(0, True), "T-Spin")
        self.assertEqual(line_clear_name(0), "")


class ModeTests(unittest.TestCase):
    def test_settings_table(self):
        self.assertEqual(MODE_SETTINGS[GameMode.CLASSIC].target_score, 1000)
        self.assertEqual(MODE_SETTINGS[GameMode.MARATHON].target_score, 10000)
        self.assertIsNone(MODE_SETTINGS[GameMode.SURVIVAL].target_score)
        self.assertEqual(MODE_SETTINGS[GameMode.TIME_ATTACK].time_limit, 120)
        self.assertFalse(MODE_SETTINGS[GameMode.TIME_ATTACK].difficulty_progression)

    def test_level_progression(self):
        self.assertEqual(recompute_level(GameMode.CLASSIC, 2500, 1), 3)
        self.assertEqual(recompute_level(GameMode.SURVIVAL, 999, 4), 1)
        self.assertEqual(recompute_level(GameMode.TIME_ATTACK, 9000, 2), 2)

    def test_completion(self):
        self.assertTrue(is_completed(1000, 1000))
        self.assertFalse(is_completed(1000, 999))
        self.assertFalse(is_completed(None, 10 ** 6))

    def test_mode_multiplier(self):
        self.assertEqual(apply_mode_multiplier(GameMode.TIME_ATTACK, 110), 220)
        self.assertEqual(apply_mode_multiplier(GameMode.SURVIVAL, 110), 165)
        self.assertEqual(apply_mode_multiplier(GameMode.SURVIVAL, 55), 82)
        self.assertEqual(apply_mode_multiplier(GameMode.MARATHON, 110), 110)

    def test_drop_interval(self):
        self.assertEqual(drop_interval_ms(1), 1000)
        self.assertEqual(drop_interval_ms(5), 800)
        self.assertEqual(drop_interval_ms(30), 100)

    def test_mode_accepts_string_values(self):
        self.assertIs(GameMode("time-attack"), GameMode.TIME_ATTACK)


class StatsHelperTests(unittest.TestCase):
    def test_grade(self):
        self.assertEqual(grade(LineClearStats()), "F")
        self.assertEqual(grade(LineClearStats(tetrises=7, singles=3)), "S+")
        self.assertEqual(grade(LineClearStats(tetrises=1, singles=1)), "S")
        self.assertEqual(grade(LineClearStats(triples=1, singles=1)), "B")
        self.assertEqual(grade(LineClearStats(singles=10)), "D")

    def test_format_time(self):
        self.assertEqual(format_time(0), "0:00")
        self.assertEqual(format_time(125), "2:05")


if __name__ == "__main__":
    unittest.main()
