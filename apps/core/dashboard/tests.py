from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from apps.core.attendance.services import record_checkout
from apps.core.complaints.senders import StudentSender
from apps.core.complaints.services import create_complain, send_message
from apps.core.finance.services import create_expense, create_income
from apps.core.hostels.models import Block, Hostel
from apps.core.hostels.services import create_room
from apps.core.students.services import create_student

from .services import admin_dashboard_summary


class DashboardSummaryTests(TestCase):
    def setUp(self):
        self.hostel = Hostel.objects.create(name='Dashboard Hostel')
        self.other_hostel = Hostel.objects.create(name='Quiet Hostel')
        block = Block.objects.create(hostel=self.hostel, block_name='A')
        self.room = create_room(block=block, room_number='A1', capacity=3)
        create_room(block=block, room_number='A2', capacity=2)

        self.asha = create_student(hostel=self.hostel, registration_number='S1', student_name='Asha', room=self.room)
        create_student(hostel=self.hostel, registration_number='S2', student_name='Bina', room=self.room)

        create_income(
            hostel=self.hostel,
            student=self.asha,
            title='Fee',
            amount=Decimal('5000.00'),
            received_amount=Decimal('3000.00'),
        )
        create_expense(hostel=self.hostel, title='Groceries', amount=Decimal('1200.00'))

        record_checkout(occupant=self.asha, checkout_time=timezone.now() - timedelta(days=1))

        complain = create_complain(student=self.asha, title='Fan', description='Fan is noisy.')
        send_message(complain=complain, sender=StudentSender(self.asha.pk), message='Please check.')

    def test_summary_counts(self):
        summary = admin_dashboard_summary(self.hostel)

        self.assertEqual(summary['rooms']['total_rooms'], 2)
        self.assertEqual(summary['rooms']['total_capacity'], 5)
        self.assertEqual(summary['rooms']['occupied_beds'], 2)
        self.assertEqual(summary['rooms']['available_beds'], 3)
        self.assertEqual(summary['students']['total'], 2)
        self.assertEqual(summary['students']['out_of_hostel'], 1)
        self.assertEqual(summary['students']['in_hostel'], 1)
        self.assertEqual(summary['finance']['monthly_incomes'], Decimal('3000.00'))
        self.assertEqual(summary['finance']['monthly_expenses'], Decimal('1200.00'))
        self.assertEqual(summary['finance']['outstanding_total'], Decimal('2000.00'))
        self.assertEqual(summary['complaints']['pending'], 1)
        self.assertEqual(summary['complaints']['unread_messages'], 1)
        self.assertEqual(
            {item['type'] for item in summary['recent_activity']},
            {'income', 'expense', 'checkincheckout'},
        )

    def test_summary_is_scoped_to_hostel(self):
        summary = admin_dashboard_summary(self.other_hostel)

        self.assertEqual(summary['rooms']['total_rooms'], 0)
        self.assertEqual(summary['students']['total'], 0)
        self.assertEqual(summary['finance']['monthly_incomes'], Decimal('0.00'))
        self.assertEqual(summary['complaints']['pending'], 0)
        self.assertEqual(summary['recent_activity'], [])

    def test_endpoint_is_admin_only(self):
        client = APIClient()
        user_model = get_user_model()
        admin = user_model.objects.create_user(username='warden', password='pass12345', role='admin')
        student_user = user_model.objects.create_user(username='bina', password='pass12345', role='student')

        client.force_authenticate(student_user)
        self.assertEqual(client.get(reverse('dashboard_summary')).status_code, 403)

        client.force_authenticate(admin)
        response = client.get(reverse('dashboard_summary'), {'hostel': self.hostel.pk})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['rooms']['total_rooms'], 2)
