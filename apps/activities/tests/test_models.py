"""
Activity Model Tests
====================

Run tests:
    python manage.py test apps.activities.tests.test_models
"""

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from apps.activities.models import Activity

User = get_user_model()


class ActivityModelTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='S3cure-pass-123', full_name='Olive Owner')
        self.now = timezone.now()

    def create_activity(self, title, **extra):
        return Activity.objects.create(owner=self.user, title=title, **extra)

    def test_defaults(self):
        activity = self.create_activity('Call back')

        self.assertEqual(activity.activity_type, 'task')
        self.assertFalse(activity.is_completed)
        self.assertIsNone(activity.completed_at)
        self.assertEqual(str(activity), 'Task: Call back')

    def test_toggle_complete(self):
        activity = self.create_activity('Send proposal')

        self.assertTrue(activity.toggle_complete())
        activity.refresh_from_db()
        self.assertTrue(activity.is_completed)
        self.assertIsNotNone(activity.completed_at)

        self.assertFalse(activity.toggle_complete())
        activity.refresh_from_db()
        self.assertFalse(activity.is_completed)
        self.assertIsNone(activity.completed_at)

    def test_upcoming_and_overdue(self):
        late = self.create_activity('Late', due_date=self.now - timedelta(days=1))
        soon = self.create_activity('Soon', due_date=self.now + timedelta(hours=1))
        later = self.create_activity('Later', due_date=self.now + timedelta(days=3))
        self.create_activity('Done', due_date=self.now + timedelta(hours=2), is_completed=True)
        self.create_activity('Undated')

        activities = Activity.objects.for_owner(self.user)

        self.assertEqual(list(activities.upcoming(self.now)), [soon, later])
        self.assertEqual(list(activities.overdue(self.now)), [late])

    def test_is_overdue(self):
        late = self.create_activity('Late', due_date=self.now - timedelta(minutes=5))
        done = self.create_activity('Done late', due_date=self.now - timedelta(minutes=5), is_completed=True)
        undated = self.create_activity('Undated')

        self.assertTrue(late.is_overdue)
        self.assertFalse(done.is_overdue)
        self.assertFalse(undated.is_overdue)

    def test_icon(self):
        self.assertEqual(self.create_activity('Ring', activity_type='call').icon, 'bi-telephone')
