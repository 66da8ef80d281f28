import unittest

from jet_assign.batch import AssignmentRequest, BatchReconciler, Outcome, dedupe_requests
from jet_assign.plan import Passenger, SeatingPlan, SeatLocation


P1 = Passenger("Alice", "A1")
P2 = Passenger("Bob", "B2")
P3 = Passenger("Carol", "C3")


class ScriptedConfirm:
    """Answers confirmation prompts from a fixed list and records them."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, message, default):
        self.prompts.append((message, default))
        return self.answers.pop(0)


def req(passenger, row, col):
    return AssignmentRequest(passenger, SeatLocation(row, col))


class TestDedupe(unittest.TestCase):
    def test_last_request_per_passport_wins(self):
        a = req(P1, 0, 0)
        b = req(P2, 1, 1)
        c = req(Passenger("Alice B", "A1"), 2, 2)
        self.assertEqual(dedupe_requests([a, b, c]), [b, c])

    def test_request_text(self):
        self.assertEqual(str(req(P1, 9, 3)), "Alice/A1/10D")


class TestBatchReconciler(unittest.TestCase):
    def test_reassignment_confirmed_and_committed(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(0, 0), P1)
        confirm = ScriptedConfirm(True)
        reconciler = BatchReconciler(plan, confirm)

        report = reconciler.reconcile([req(P1, 1, 1)])
        self.assertEqual(report.accepted, [req(P1, 1, 1)])
        self.assertEqual(len(confirm.prompts), 1)
        self.assertIn("was already assigned to 1A", confirm.prompts[0][0])
        self.assertFalse(confirm.prompts[0][1])
        # analysis leaves the live plan alone
        self.assertEqual(plan.location_of(P1), SeatLocation(0, 0))

        self.assertEqual(reconciler.commit(report), 1)
        self.assertFalse(plan.is_occupied(SeatLocation(0, 0)))
        self.assertEqual(plan.location_of(P1), SeatLocation(1, 1))

    def test_same_seat_within_batch(self):
        plan = SeatingPlan()
        report = BatchReconciler(plan, ScriptedConfirm()).reconcile([req(P1, 2, 2), req(P2, 2, 2)])
        self.assertEqual(report.decisions, [(req(P1, 2, 2), Outcome.accepted), (req(P2, 2, 2), Outcome.rejected_occupied)])
        self.assertEqual(len(plan), 0)

    def test_own_seat_is_accepted(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(0, 0), P1)
        reconciler = BatchReconciler(plan, ScriptedConfirm(True))
        report = reconciler.reconcile([req(P1, 0, 0)])
        self.assertEqual(report.accepted, [req(P1, 0, 0)])
        reconciler.commit(report)
        self.assertEqual(plan.location_of(P1), SeatLocation(0, 0))
        self.assertEqual(len(plan), 1)

    def test_reassignment_declined(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(0, 0), P1)
        report = BatchReconciler(plan, ScriptedConfirm(False)).reconcile([req(P1, 3, 3)])
        self.assertEqual(report.rejected_assigned, [req(P1, 3, 3)])
        self.assertFalse(report.has_commits)

    def test_declined_passenger_keeps_seat_blocked(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(0, 0), P1)
        report = BatchReconciler(plan, ScriptedConfirm(False)).reconcile([req(P1, 3, 3), req(P2, 0, 0)])
        self.assertEqual(report.rejected_assigned, [req(P1, 3, 3)])
        self.assertEqual(report.rejected_occupied, [req(P2, 0, 0)])

    def test_vacated_seat_can_be_claimed_later_in_batch(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(0, 0), P1)
        reconciler = BatchReconciler(plan, ScriptedConfirm(True))
        report = reconciler.reconcile([req(P1, 5, 0), req(P2, 0, 0)])
        self.assertEqual(report.accepted, [req(P1, 5, 0), req(P2, 0, 0)])

        self.assertEqual(reconciler.commit(report), 2)
        self.assertEqual(plan.location_of(P1), SeatLocation(5, 0))
        self.assertEqual(plan.location_of(P2), SeatLocation(0, 0))

    def test_seat_claimed_before_it_is_vacated(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(0, 0), P1)
        reconciler = BatchReconciler(plan, ScriptedConfirm(True))
        report = reconciler.reconcile([req(P2, 0, 0), req(P1, 5, 0)])
        self.assertEqual(report.rejected_occupied, [req(P2, 0, 0)])
        self.assertEqual(report.accepted, [req(P1, 5, 0)])

    def test_reassign_target_occupied_in_live_plan(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(0, 0), P1)
        plan.assign(SeatLocation(0, 1), P2)
        reconciler = BatchReconciler(plan, ScriptedConfirm(True, True))
        report = reconciler.reconcile([req(P1, 0, 1), req(P2, 0, 0)])
        self.assertEqual(report.rejected_occupied, [req(P1, 0, 1), req(P2, 0, 0)])
        self.assertFalse(report.has_commits)

    def test_occupied_in_live_plan(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(4, 4), P3)
        report = BatchReconciler(plan, ScriptedConfirm()).reconcile([req(P1, 4, 4), req(P2, 4, 5)])
        self.assertEqual(report.rejected_occupied, [req(P1, 4, 4)])
        self.assertEqual(report.accepted, [req(P2, 4, 5)])
        self.assertEqual(report.counts()[Outcome.accepted], 1)

    def test_each_reconcile_starts_fresh(self):
        plan = SeatingPlan()
        reconciler = BatchReconciler(plan, ScriptedConfirm())
        reconciler.reconcile([req(P1, 2, 2)])
        report = reconciler.reconcile([req(P2, 2, 2)])
        self.assertEqual(report.accepted, [req(P2, 2, 2)])

    def test_duplicate_passenger_in_input_is_collapsed(self):
        plan = SeatingPlan()
        report = BatchReconciler(plan, ScriptedConfirm()).reconcile([req(P1, 2, 2), req(P1, 3, 3)])
        self.assertEqual(report.accepted, [req(P1, 3, 3)])

    def test_reassign_default_is_passed_to_confirm(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(0, 0), P1)
        confirm = ScriptedConfirm(True)
        BatchReconciler(plan, confirm, reassign_default=True).reconcile([req(P1, 1, 0)])
        self.assertTrue(confirm.prompts[0][1])

    def test_commit_keeps_one_seat_per_passenger(self):
        plan = SeatingPlan()
        plan.assign(SeatLocation(0, 0), P1)
        plan.assign(SeatLocation(0, 1), P2)
        reconciler = BatchReconciler(plan, ScriptedConfirm(True, True))
        report = reconciler.reconcile([req(P1, 7, 0), req(P2, 0, 0), req(P3, 0, 1)])
        self.assertEqual(len(report.accepted), 3)
        reconciler.commit(report)

        seen = [p.passport_id for _, p in plan.occupied()]
        self.assertEqual(sorted(seen), ["A1", "B2", "C3"])
        self.assertEqual(plan.location_of(P3), SeatLocation(0, 1))


if __name__ == "__main__":
    unittest.main()
