import unittest
from alumni_backend.utils.capacity_evaluator import CapacityEvaluator


class TestCapacityEvaluator(unittest.TestCase):
    def setUp(self):
        self.evaluator = CapacityEvaluator()

    def test_unlimited_when_limit_unset(self):
        self.assertTrue(self.evaluator.can_admit(0, None))
        self.assertTrue(self.evaluator.can_admit(10_000, None))

    def test_admits_below_limit(self):
        self.assertTrue(self.evaluator.can_admit(0, 1))
        self.assertTrue(self.evaluator.can_admit(2, 3))

    def test_rejects_at_or_above_limit(self):
        self.assertFalse(self.evaluator.can_admit(3, 3))
        self.assertFalse(self.evaluator.can_admit(4, 3))

    def test_zero_limit_admits_nobody(self):
        self.assertFalse(self.evaluator.can_admit(0, 0))


if __name__ == "__main__":
    unittest.main()
