import unittest
from dataclasses import replace

from blockfall.game import ACHIEVEMENTS, GameMode, check_achievements, initial_achievements, merge_achievements

from .support import FakeClock, make_processor


def by_id(achievements):
    return {a.id: a for a in achievements}


class AchievementTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.processor = make_processor(clock=self.clock)
        self.state = self.processor.new_game()
        self.now = self.clock.now

    def test_templates_start_locked(self):
        self.assertEqual(len(ACHIEVEMENTS), 12)
        self.assertTrue(all(not a.unlocked for a in initial_achievements()))

    def test_first_game_unlocks_on_game_over(self):
        changed = by_id(check_achievements(self.state.evolve(is_game_over=True), initial_achievements(), self.now))
        self.assertTrue(changed["first_game"].unlocked)
        self.assertIsNotNone(changed["first_game"].unlocked_date)
        self.assertEqual(changed["first_game"].progress, 1)

    def test_unlocked_achievements_are_skipped(self):
        prior = [replace(a, unlocked=True) if a.id == "first_game" else a for a in initial_achievements()]
        changed = by_id(check_achievements(self.state.evolve(is_game_over=True), prior, self.now))
        self.assertNotIn("first_game", changed)

    def test_combo_progress_then_unlock(self):
        changed = by_id(check_achievements(self.state.evolve(combo=4), initial_achievements(), self.now))
        self.assertFalse(changed["combo_king"].unlocked)
        self.assertEqual(changed["combo_king"].progress, 4)

        prior = merge_achievements(initial_achievements(), changed.values())
        # lower combo later does not lower or re-emit progress
        again = by_id(check_achievements(self.state.evolve(combo=2), prior, self.now))
        self.assertNotIn("combo_king", again)

        done = by_id(check_achievements(self.state.evolve(combo=10), prior, self.now))
        self.assertTrue(done["combo_king"].unlocked)
        self.assertEqual(done["combo_king"].progress, 10)

    def test_speed_demon_uses_play_time(self):
        perf = replace(self.state.performance, pieces_placed=60)
        state = self.state.evolve(performance=perf)
        self.assertNotIn("speed_demon", by_id(check_achievements(state, initial_achievements(), self.now + 120)))
        changed = by_id(check_achievements(state, initial_achievements(), self.now + 60))
        self.assertTrue(changed["speed_demon"].unlocked)

    def test_level_ten(self):
        changed = by_id(check_achievements(self.state.evolve(level=10), initial_achievements(), self.now))
        self.assertTrue(changed["level_10"].unlocked)
        self.assertEqual(changed["level_10"].progress, 10)

    def test_time_attack_pro_only_in_time_attack(self):
        classic = by_id(check_achievements(self.state.evolve(score=6000), initial_achievements(), self.now))
        self.assertNotIn("time_attack_pro", classic)
        ta = self.processor.new_game(GameMode.TIME_ATTACK).evolve(score=6000)
        changed = by_id(check_achievements(ta, initial_achievements(), self.now))
        self.assertTrue(changed["time_attack_pro"].unlocked)

    def test_survival_expert_after_ten_minutes(self):
        survival = self.processor.new_game(GameMode.SURVIVAL)
        partial = by_id(check_achievements(survival, initial_achievements(), self.now + 300))
        self.assertEqual(partial["survival_expert"].progress, 300)
        self.assertFalse(partial["survival_expert"].unlocked)
        done = by_id(check_achievements(survival, initial_achievements(), self.now + 600))
        self.assertTrue(done["survival_expert"].unlocked)

    def test_marathon_completion(self):
        marathon = self.processor.new_game(GameMode.MARATHON).evolve(is_game_completed=True)
        changed = by_id(check_achievements(marathon, initial_achievements(), self.now))
        self.assertTrue(changed["marathon_winner"].unlocked)
        self.assertTrue(changed["first_game"].unlocked)

    def test_merge_keeps_template_order_and_unlocks(self):
        unlocked = replace(ACHIEVEMENTS[0], unlocked=True)
        merged = merge_achievements(initial_achievements(), [unlocked])
        self.assertEqual([a.id for a in merged], [a.id for a in ACHIEVEMENTS])
        self.assertTrue(merged[0].unlocked)
        relocked = merge_achievements(merged, [ACHIEVEMENTS[0]])
        self.assertTrue(relocked[0].unlocked)


if __name__ == "__main__":
    unittest.main()
