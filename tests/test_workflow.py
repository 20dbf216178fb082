"""Workflow driver: ordered listeners, credit-check queue and automated decisions."""
import unittest

from errors import InvalidTransitionError
from services.events import ApplicationSubmitted, CreditCheckQueue, StatusChanged
from services.workflow import ApplicationWorkflow
from tests.support import CLOCK, NOW, transient_application


class RecordingListener:
    def __init__(self, name, log):
        self.name = name
        self.log = log

    async def __call__(self, event):
        self.log.append((self.name, event))


class TestApplicationWorkflow(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.log = []
        self.workflow = ApplicationWorkflow(
            [RecordingListener("audit", self.log), RecordingListener("queue", self.log)],
            clock=CLOCK,
        )

    async def test_listeners_run_in_order_after_transition(self):
        application = transient_application(status="submitted")
        event = await self.workflow.transition(application, "under_review")
        self.assertEqual([name for name, _ in self.log], ["audit", "queue"])
        self.assertIs(self.log[0][1], event)
        self.assertIsInstance(event, StatusChanged)
        self.assertEqual(event.occurred_at, NOW)

    async def test_failed_transition_emits_nothing(self):
        application = transient_application(status="approved")
        with self.assertRaises(InvalidTransitionError):
            await self.workflow.transition(application, "draft")
        self.assertEqual(self.log, [])

    async def test_created_emits_submission(self):
        application = transient_application(status="submitted")
        event = await self.workflow.created(application)
        self.assertIsInstance(event, ApplicationSubmitted)
        self.assertEqual(event.status, "submitted")
        self.assertEqual(len(self.log), 2)

    async def test_automated_approval(self):
        application = transient_application(status="submitted")
        decision = await self.workflow.process_automated_decision(application)
        self.assertTrue(decision.approved)
        self.assertEqual(application.status, "approved")
        self.assertEqual(application.notes, "Approved via automated system")
        self.assertEqual(application.decision_at, NOW)

    async def test_automated_referral(self):
        application = transient_application(status="submitted", loan_to_value_ratio=90.0, risk_score=55)
        decision = await self.workflow.process_automated_decision(application)
        self.assertFalse(decision.approved)
        self.assertEqual(application.status, "under_review")
        self.assertEqual(
            application.notes,
            "Requires manual review: LTV ratio exceeds 80%, Risk score below acceptable threshold",
        )

    async def test_automated_decision_on_finalized_application(self):
        application = transient_application(status="rejected")
        with self.assertRaises(InvalidTransitionError):
            await self.workflow.process_automated_decision(application)


class TestCreditCheckQueue(unittest.IsolatedAsyncioTestCase):
    async def test_queues_only_submitted_creations(self):
        queue = CreditCheckQueue()
        workflow = ApplicationWorkflow([queue], clock=CLOCK)
        await workflow.created(transient_application(id="app-draft", status="draft"))
        await workflow.created(transient_application(id="app-submitted", status="submitted"))
        await workflow.transition(transient_application(id="app-moved", status="draft"), "submitted")
        self.assertEqual(queue.drain(), ["app-submitted"])
        self.assertEqual(len(queue), 0)

    async def test_disabled_queue_ignores_everything(self):
        queue = CreditCheckQueue(enabled=False)
        await ApplicationWorkflow([queue], clock=CLOCK).created(transient_application(status="submitted"))
        self.assertEqual(queue.drain(), [])


if __name__ == "__main__":
    unittest.main()
