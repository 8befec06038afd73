# tests/test_matcher.py
import unittest
import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mentor_matching.errors import NotFound
from mentor_matching.matching.matcher import (
    has_capacity,
    match,
    rank_results,
    score_overlap,
)
from mentor_matching.models import Connection, ConnectionStatus, Mentor, Startup


def mentor(mid, skills, hours=4, active_count=0, active=True):
    return Mentor(
        id=mid,
        name=f"Mentor {mid}",
        skills=list(skills),
        hours_per_week=hours,
        active_connection_count=active_count,
        active=active,
    )


class TestScoring(unittest.TestCase):

    def test_no_needs_scores_zero_for_everyone(self):
        startup = Startup(id=1, name="S1", needs=[])
        pool = [mentor(1, ["Fundraising"]), mentor(2, [])]
        for r in match(startup, pool):
            self.assertEqual(r.match_score, 0)
            self.assertEqual(r.matching_skills, [])

    def test_exact_skills_score_full(self):
        needs = ["Fundraising", "Marketing", "Legal"]
        startup = Startup(id=1, name="S1", needs=needs)
        [r] = match(startup, [mentor(1, ["legal", "MARKETING", "Fundraising"])])
        self.assertEqual(r.match_score, 100)

    def test_blank_needs_do_not_lower_the_score(self):
        startup = Startup(id=1, name="S1", needs=["Legal", ""])
        [r] = match(startup, [mentor(1, ["Legal", ""])])
        self.assertEqual(r.match_score, 100)
        self.assertEqual(r.matching_skills, ["Legal"])

        blank = Startup(id=2, name="S2", needs=["", "  "])
        [r] = match(blank, [mentor(1, ["Legal", ""])])
        self.assertEqual(r.match_score, 0)

    def test_substring_either_direction(self):
        startup = Startup(id=1, name="S1", needs=["fundraising strategy", "Marketing"])
        [r] = match(startup, [mentor(1, ["Fundraising", "Digital Marketing Ops"])])
        self.assertEqual(r.match_score, 100)
        self.assertEqual(r.matching_skills, ["Fundraising", "Digital Marketing Ops"])

    def test_one_skill_can_cover_several_needs(self):
        startup = Startup(id=1, name="S1", needs=["Marketing", "Strategy"])
        [r] = match(startup, [mentor(1, ["Marketing Strategy", "Legal"])])
        self.assertEqual(r.match_score, 100)
        self.assertEqual(r.matching_skills, ["Marketing Strategy"])

    def test_matching_skills_deduplicated_in_mentor_order(self):
        startup = Startup(id=1, name="S1", needs=["Sales", "Marketing"])
        [r] = match(startup, [mentor(1, ["Marketing", "Legal", "marketing", "Sales"])])
        self.assertEqual(r.matching_skills, ["Marketing", "Sales"])

    def test_rounding_is_half_up(self):
        self.assertEqual(score_overlap(1, 3), 33)
        self.assertEqual(score_overlap(2, 3), 67)
        self.assertEqual(score_overlap(1, 8), 13)
        self.assertEqual(score_overlap(0, 4), 0)
        self.assertEqual(score_overlap(0, 0), 0)

    def test_score_always_in_range(self):
        startup = Startup(id=1, name="S1", needs=["A", "B", "C"])
        pool = [mentor(i, skills) for i, skills in enumerate(
            [[], ["a"], ["a", "b"], ["a", "b", "c"], ["abc"], ["zzz"]], start=1)]
        for r in match(startup, pool):
            self.assertIsInstance(r.match_score, int)
            self.assertGreaterEqual(r.match_score, 0)
            self.assertLessEqual(r.match_score, 100)


class TestCapacity(unittest.TestCase):

    def test_capacity_boundary_is_strict(self):
        self.assertFalse(has_capacity(mentor(1, [], hours=3, active_count=2)))
        self.assertTrue(has_capacity(mentor(1, [], hours=3.1, active_count=2)))
        self.assertTrue(has_capacity(mentor(1, [], hours=2, active_count=0)))
        self.assertFalse(has_capacity(mentor(1, [], hours=0, active_count=0)))

    def test_full_mentors_still_returned(self):
        startup = Startup(id=1, name="S1", needs=["Legal"])
        results = match(startup, [mentor(1, ["Legal"], hours=1.5, active_count=1)])
        self.assertEqual(len(results), 1)
        self.assertFalse(results[0].has_capacity)
        self.assertEqual(results[0].match_score, 100)


class TestRanking(unittest.TestCase):

    def test_fundraising_marketing_scenario(self):
        startup = Startup(id=1, name="S1", needs=["Fundraising", "Marketing"])
        a = mentor("A", ["Fundraising", "Brand Strategy"], hours=4, active_count=1)
        b = mentor("B", ["Legal"], hours=2, active_count=0)

        results = match(startup, [b, a])

        self.assertEqual([r.mentor.id for r in results], ["A", "B"])
        ra, rb = results
        self.assertEqual(ra.match_score, 50)
        self.assertTrue(ra.has_capacity)
        self.assertEqual(ra.matching_skills, ["Fundraising"])
        self.assertEqual(rb.match_score, 0)
        self.assertTrue(rb.has_capacity)

    def test_capacity_breaks_score_ties(self):
        startup = Startup(id=1, name="S1", needs=["Sales", "Legal"])
        full = mentor(1, ["Sales"], hours=3, active_count=2)
        free = mentor(2, ["Legal"], hours=3, active_count=0)
        results = match(startup, [full, free])
        self.assertEqual([r.mentor.id for r in results], [2, 1])

    def test_remaining_ties_keep_input_order(self):
        startup = Startup(id=1, name="S1", needs=["Sales"])
        pool = [mentor(i, ["Sales"]) for i in (5, 3, 9, 1)]
        self.assertEqual([r.mentor.id for r in match(startup, pool)], [5, 3, 9, 1])

    def test_never_places_lower_score_above_higher(self):
        startup = Startup(id=1, name="S1", needs=["A", "B", "C", "D"])
        pool = [
            mentor(1, ["a"], hours=0),
            mentor(2, ["a", "b", "c"], hours=0),
            mentor(3, ["d"]),
            mentor(4, ["a", "b"]),
            mentor(5, ["a", "b", "c", "d"], hours=1, active_count=1),
            mentor(6, []),
        ]
        results = match(startup, pool)
        for prev, nxt in zip(results, results[1:]):
            self.assertGreaterEqual(prev.match_score, nxt.match_score)
            if prev.match_score == nxt.match_score:
                self.assertGreaterEqual(prev.has_capacity, nxt.has_capacity)

    def test_matching_twice_gives_same_order(self):
        startup = Startup(id=1, name="S1", needs=["Sales", "Legal", "Ops"])
        pool = [mentor(i, skills, hours=i % 3, active_count=i % 2) for i, skills in enumerate(
            [["Sales"], ["Legal"], ["Ops"], ["Sales", "Ops"], [], ["Legal"]], start=1)]
        first = [r.mentor.id for r in match(startup, pool)]
        second = [r.mentor.id for r in match(startup, pool)]
        self.assertEqual(first, second)

    def test_rank_results_does_not_reorder_input(self):
        startup = Startup(id=1, name="S1", needs=["Sales"])
        results = match(startup, [mentor(1, []), mentor(2, ["Sales"])])
        original = list(reversed(results))
        rank_results(original)
        self.assertEqual([r.mentor.id for r in original], [1, 2])


class TestEligibilityAndFlags(unittest.TestCase):

    def test_inactive_mentors_never_returned(self):
        startup = Startup(id=1, name="S1", needs=["Sales"])
        pool = [mentor(1, ["Sales"], active=False), mentor(2, ["Sales"])]
        self.assertEqual([r.mentor.id for r in match(startup, pool)], [2])

    def test_missing_or_inactive_startup_is_not_found(self):
        with self.assertRaises(NotFound):
            match(None, [mentor(1, ["Sales"])])
        with self.assertRaises(NotFound):
            match(Startup(id=7, name="Gone", needs=["Sales"], active=False), [])

    def test_empty_pool_returns_empty_list(self):
        self.assertEqual(match(Startup(id=1, name="S1", needs=["Sales"]), []), [])

    def test_already_connected_only_for_open_connections_of_this_startup(self):
        startup = Startup(id=1, name="S1", needs=["Sales"])
        pool = [mentor(i, ["Sales"]) for i in (1, 2, 3, 4)]
        connections = [
            Connection(id=1, mentor_id=1, startup_id=1, status=ConnectionStatus.PENDING),
            Connection(id=2, mentor_id=2, startup_id=1, status=ConnectionStatus.COMPLETED),
            Connection(id=3, mentor_id=3, startup_id=2, status=ConnectionStatus.ACTIVE),
            Connection(id=4, mentor_id=4, startup_id=1, status=ConnectionStatus.ACTIVE),
        ]
        flags = {r.mentor.id: r.already_connected for r in match(startup, pool, connections)}
        self.assertEqual(flags, {1: True, 2: False, 3: False, 4: True})

    def test_to_dict_carries_mentor_payload_and_derived_fields(self):
        startup = Startup(id=1, name="S1", needs=["Sales"])
        m = mentor(1, ["Sales"])
        m.company = "Acme"
        [r] = match(startup, [m])
        d = r.to_dict()
        self.assertEqual(d["company"], "Acme")
        self.assertEqual(d["skills"], ["Sales"])
        self.assertEqual(d["match_score"], 100)
        self.assertTrue(d["has_capacity"])
        self.assertFalse(d["already_connected"])
        self.assertEqual(d["matching_skills"], ["Sales"])


if __name__ == '__main__':
    unittest.main()
