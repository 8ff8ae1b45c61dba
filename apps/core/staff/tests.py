from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from apps.core.hostels.models import Hostel

from .models import Staff
from .services import create_staff, deactivate_staff, update_staff


class StaffServiceTests(TestCase):
    def setUp(self):
        self.hostel = Hostel.objects.create(name='Staff Hostel')
        self.user_model = get_user_model()

    def test_create_staff_with_salary(self):
        staff = create_staff(
            hostel=self.hostel,
            employee_id='E001',
            staff_name='Ram',
            salary_amount=Decimal('25000.00'),
        )
        self.assertEqual(staff.salary_amount, Decimal('25000.00'))
        self.assertTrue(staff.is_active)

    def test_negative_salary_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            create_staff(hostel=self.hostel, employee_id='E002', staff_name='Shyam', salary_amount=Decimal('-1'))
        self.assertIn('salary_amount', ctx.exception.message_dict)

    def test_linked_user_must_have_staff_role(self):
        student_user = self.user_model.objects.create_user(username='stud', password='pass12345', role='student')

        with self.assertRaises(ValidationError) as ctx:
            create_staff(hostel=self.hostel, employee_id='E003', staff_name='Hari', user=student_user)
        self.assertIn('user', ctx.exception.message_dict)

    def test_user_cannot_link_to_two_staff_records(self):
        user = self.user_model.objects.create_user(username='cook', password='pass12345', role='staff')
        create_staff(hostel=self.hostel, employee_id='E004', staff_name='Gita', user=user)
        other = create_staff(hostel=self.hostel, employee_id='E005', staff_name='Mina')

        with self.assertRaises(ValidationError):
            update_staff(other, user=user)

    def test_deactivate_keeps_record(self):
        staff = create_staff(hostel=self.hostel, employee_id='E006', staff_name='Kiran')

        deactivate_staff(staff)

        staff.refresh_from_db()
        self.assertFalse(staff.is_active)
        self.assertTrue(Staff.objects.filter(pk=staff.pk).exists())


class StaffApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user_model = get_user_model()
        self.hostel = Hostel.objects.create(name='Staff API Hostel')

    def test_staff_member_sees_own_profile(self):
        user = self.user_model.objects.create_user(username='guard', password='pass12345', role='staff')
        create_staff(hostel=self.hostel, employee_id='E010', staff_name='Guard', user=user, position='Security')
        self.client.force_authenticate(user)

        response = self.client.get(reverse('staff_me'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['position'], 'Security')

    def test_student_cannot_manage_staff(self):
        user = self.user_model.objects.create_user(username='stud', password='pass12345', role='student')
        self.client.force_authenticate(user)

        response = self.client.get(reverse('staff-list'))

        self.assertEqual(response.status_code, 403)
