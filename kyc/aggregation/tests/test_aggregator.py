import itertools

from django.test import SimpleTestCase

from kyc.aggregation.services.aggregator import FrameAggregator

OBSERVATIONS = [
    ("Name", "Jane Smith", 0.7),
    ("Name", "Jane Smit", 0.9),
    ("Name", "J Smith", 0.5),
    ("State", "New York", 0.8),
    ("State", "New Yor", 0.8),
    ("Date of Birth", "04/15/1985", 0.6),
    ("Date of Birth", "04/16/1985", 0.95),
    ("Class", "D", 0.4),
]


def aggregate(observations):
    agg = FrameAggregator()
    agg.observe_all(observations)
    return agg


class FrameAggregatorTest(SimpleTestCase):
    def test_order_independence(self):
        expected = aggregate(OBSERVATIONS).best_estimate()
        for perm in itertools.permutations(OBSERVATIONS):
            self.assertEqual(aggregate(perm).best_estimate(), expected)

    def test_confidence_dominance(self):
        agg = aggregate([("Name", "Jane Smith", 0.6)])
        agg.observe("Name", "Jan", 0.61)
        self.assertEqual(agg.best_estimate()["Name"], "Jan")

    def test_lower_confidence_ignored(self):
        agg = aggregate([("Name", "Jane Smith", 0.6), ("Name", "Jane Smithson", 0.5)])
        self.assertEqual(agg.best_estimate()["Name"], "Jane Smith")

    def test_length_tie_break(self):
        agg = aggregate([("State", "New Yor", 0.8), ("State", "New York", 0.8)])
        self.assertEqual(agg.best_estimate()["State"], "New York")
        agg = aggregate([("State", "New York", 0.8), ("State", "New Yor", 0.8)])
        self.assertEqual(agg.best_estimate()["State"], "New York")

    def test_equal_confidence_and_length_keeps_first_seen(self):
        agg = aggregate([("Class", "D", 0.5), ("Class", "C", 0.5)])
        self.assertEqual(agg.best_estimate()["Class"], "D")

    def test_count_always_incremented(self):
        agg = aggregate([("Class", "D", 0.5), ("Class", "C", 0.1), ("Class", "M", 0.9)])
        ev = agg.evidence("Class")
        self.assertEqual(ev.count, 3)
        self.assertEqual(ev.value, "M")
        self.assertEqual(ev.confidence, 0.9)

    def test_empty_values_never_inserted(self):
        agg = aggregate([("Name", "", 0.9), ("Name", "   ", 0.9)])
        self.assertEqual(agg.best_estimate(), {})
        self.assertEqual(len(agg), 0)

    def test_observe_fields(self):
        agg = FrameAggregator()
        agg.observe_fields({"Name": "Jane", "Class": "D"}, 0.7)
        self.assertEqual(agg.best_estimate(), {"Name": "Jane", "Class": "D"})
