# tests/test_loader.py
import unittest
import sys
import os
import json
import tempfile

import pandas as pd

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mentor_matching.data.loader import (
    load_connections,
    load_mentors,
    load_registry,
    load_startups,
    results_to_frame,
)
from mentor_matching.errors import InvalidRating, UnknownStatus
from mentor_matching.models import ConnectionStatus


class TestCsvSnapshot(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        d = self.tmp.name
        self.mentors_csv = os.path.join(d, "mentors.csv")
        self.startups_csv = os.path.join(d, "startups.csv")
        self.connections_csv = os.path.join(d, "connections.csv")
        self.interactions_csv = os.path.join(d, "interactions.csv")

        pd.DataFrame([
            {"id": 1, "name": "Ana", "skills": json.dumps(["Fundraising", "Brand Strategy"]),
             "hours_per_week": 4, "active": 1, "company": "Acme"},
            {"id": 2, "name": "Ben", "skills": "Legal; Contracts",
             "hours_per_week": None, "active": 1, "company": None},
            {"id": 3, "name": "Cy", "skills": "[]", "hours_per_week": 5, "active": 0,
             "company": "Gone Inc"},
        ]).to_csv(self.mentors_csv, index=False)

        pd.DataFrame([
            {"id": 10, "name": "Rocket", "needs": json.dumps(["Fundraising", "Marketing"]), "active": 1},
            {"id": 11, "name": "Sleepy", "needs": "", "active": 0},
        ]).to_csv(self.startups_csv, index=False)

        pd.DataFrame([
            {"id": 1, "mentor_id": 1, "startup_id": 10, "status": "Active",
             "notes": "weekly", "startup_rating": None, "mentor_rating": None},
            {"id": 2, "mentor_id": 2, "startup_id": 10, "status": "Completed",
             "notes": None, "startup_rating": 5, "mentor_rating": 4},
        ]).to_csv(self.connections_csv, index=False)

        pd.DataFrame([
            {"mentor_id": 1, "startup_id": 10, "date": "2026-01-10", "type": "Meeting", "rating": 5},
            {"mentor_id": 1, "startup_id": None, "date": "2026-02-01", "type": "Event", "rating": None},
            {"mentor_id": 1, "startup_id": 10, "date": "2026-02-10", "type": "Meeting", "rating": 4},
        ]).to_csv(self.interactions_csv, index=False)

    def tearDown(self):
        self.tmp.cleanup()

    def test_load_mentors(self):
        ana, ben, cy = load_mentors(self.mentors_csv)
        self.assertEqual(ana.skills, ["Fundraising", "Brand Strategy"])
        self.assertEqual(ana.hours_per_week, 4)
        self.assertEqual(ana.company, "Acme")
        self.assertEqual(ben.skills, ["Legal", "Contracts"])
        self.assertEqual(ben.hours_per_week, 2)   # default
        self.assertEqual(ben.company, "")
        self.assertEqual(cy.skills, [])
        self.assertFalse(cy.active)

    def test_load_startups(self):
        rocket, sleepy = load_startups(self.startups_csv)
        self.assertEqual(rocket.needs, ["Fundraising", "Marketing"])
        self.assertTrue(rocket.active)
        self.assertEqual(sleepy.needs, [])
        self.assertFalse(sleepy.active)

    def test_load_connections(self):
        active, done = load_connections(self.connections_csv)
        self.assertIs(active.status, ConnectionStatus.ACTIVE)
        self.assertIsNone(active.startup_rating)
        self.assertIs(done.status, ConnectionStatus.COMPLETED)
        self.assertEqual((done.startup_rating, done.mentor_rating), (5, 4))
        self.assertEqual(done.notes, "")

    def test_load_registry_and_match(self):
        registry = load_registry(
            self.mentors_csv, self.startups_csv, self.connections_csv, self.interactions_csv,
        )
        results = registry.match_for_startup(10)
        self.assertEqual([r.mentor.id for r in results], [1, 2])
        ana = results[0]
        self.assertEqual(ana.match_score, 50)
        self.assertEqual(ana.mentor.active_connection_count, 1)
        self.assertEqual(ana.mentor.avg_rating, 4.5)
        self.assertTrue(ana.already_connected)
        self.assertFalse(results[1].already_connected)   # Completed

    def test_out_of_range_rating_in_csv_rejected(self):
        pd.DataFrame([
            {"id": 1, "mentor_id": 1, "startup_id": 10, "status": "Completed",
             "startup_rating": 9, "mentor_rating": None},
        ]).to_csv(self.connections_csv, index=False)
        with self.assertRaises(InvalidRating):
            load_registry(self.mentors_csv, self.startups_csv, self.connections_csv)

    def test_unknown_status_in_csv_rejected(self):
        pd.DataFrame([
            {"id": 1, "mentor_id": 1, "startup_id": 10, "status": "Archived"},
        ]).to_csv(self.connections_csv, index=False)
        with self.assertRaises(UnknownStatus):
            load_connections(self.connections_csv)

    def test_optional_files_may_be_missing(self):
        registry = load_registry(
            self.mentors_csv, self.startups_csv,
            os.path.join(self.tmp.name, "nope.csv"), None,
        )
        self.assertEqual(registry.list_connections(), [])

    def test_results_to_frame(self):
        registry = load_registry(self.mentors_csv, self.startups_csv, self.connections_csv)
        df = results_to_frame(registry.match_for_startup(10))
        self.assertEqual(list(df["mentor_id"]), [1, 2])
        self.assertEqual(list(df["score"]), [50, 0])
        self.assertEqual(df.loc[0, "matching_skills"], "Fundraising")
        self.assertTrue(results_to_frame([]).empty)


if __name__ == '__main__':
    unittest.main()
