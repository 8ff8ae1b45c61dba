from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from apps.core.finance.models import StudentFinancial
from apps.core.hostels.models import Hostel, Room
from apps.core.hostels.services import create_block, create_room

from .models import Student
from .services import assign_room, create_student, deactivate_student, update_student


class StudentRoomCapacityTests(TestCase):
    def setUp(self):
        self.hostel = Hostel.objects.create(name='Capacity Hostel')
        self.block = create_block(hostel=self.hostel, block_name='A')
        self.room = create_room(block=self.block, room_number='101', capacity=2)

    def _student(self, registration_number, name, room=None, hostel=None):
        return create_student(
            hostel=hostel or self.hostel,
            registration_number=registration_number,
            student_name=name,
            room=room,
        )

    def test_third_student_is_rejected_from_double_room(self):
        self._student('A1', 'Anil', room=self.room)
        self._student('B1', 'Bikash', room=self.room)

        with self.assertRaises(ValidationError) as ctx:
            self._student('C1', 'Chandra', room=self.room)

        self.assertIn('room', ctx.exception.message_dict)
        self.assertEqual(self.room.students.filter(is_active=True).count(), 2)
        self.assertFalse(Student.objects.filter(registration_number='C1').exists())

    def test_room_status_follows_occupancy(self):
        first = self._student('A2', 'Asha', room=self.room)
        self.room.refresh_from_db()
        self.assertEqual(self.room.status, Room.STATUS_AVAILABLE)

        self._student('B2', 'Bina', room=self.room)
        self.room.refresh_from_db()
        self.assertEqual(self.room.status, Room.STATUS_OCCUPIED)

        deactivate_student(first)
        self.room.refresh_from_db()
        self.assertEqual(self.room.status, Room.STATUS_AVAILABLE)

    def test_updating_student_in_full_room_does_not_count_self(self):
        first = self._student('A3', 'Arun', room=self.room)
        self._student('B3', 'Bela', room=self.room)

        first = update_student(first, contact_number='9800000000', is_active=True)
        self.assertEqual(first.contact_number, '9800000000')

    def test_moving_into_full_room_is_rejected(self):
        other_room = create_room(block=self.block, room_number='102', capacity=1)
        self._student('A4', 'Amit', room=self.room)
        self._student('B4', 'Binod', room=self.room)
        mover = self._student('C4', 'Chhiring', room=other_room)

        with self.assertRaises(ValidationError):
            assign_room(mover, self.room)

        mover.refresh_from_db()
        self.assertEqual(mover.room, other_room)

    def test_reactivating_into_full_room_is_rejected(self):
        leaver = self._student('A5', 'Alina', room=self.room)
        deactivate_student(leaver)
        self._student('B5', 'Bishal', room=self.room)
        self._student('C5', 'Chirag', room=self.room)

        with self.assertRaises(ValidationError):
            update_student(leaver, is_active=True, room=self.room)

    def test_room_must_belong_to_student_hostel(self):
        other_hostel = Hostel.objects.create(name='Elsewhere')

        with self.assertRaises(ValidationError) as ctx:
            self._student('X1', 'Xavier', room=self.room, hostel=other_hostel)
        self.assertIn('room', ctx.exception.message_dict)

    def test_hostel_change_keeping_old_room_is_rejected(self):
        other_hostel = Hostel.objects.create(name='Annex')
        student = self._student('H1', 'Hari', room=self.room)

        with self.assertRaises(ValidationError) as ctx:
            update_student(student, hostel=other_hostel, room=self.room)
        self.assertIn('room', ctx.exception.message_dict)

        student.refresh_from_db()
        self.assertEqual(student.hostel_id, self.hostel.pk)

    def test_deactivation_frees_the_bed(self):
        student = self._student('A6', 'Anju', room=self.room)

        deactivate_student(student)

        student.refresh_from_db()
        self.assertFalse(student.is_active)
        self.assertIsNone(student.room)


class StudentApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user_model = get_user_model()
        self.admin = self.user_model.objects.create_user(username='admin', password='pass12345', role='admin')
        self.hostel = Hostel.objects.create(name='API Hostel')
        self.block = create_block(hostel=self.hostel, block_name='A')
        self.room = create_room(block=self.block, room_number='101', capacity=1)

    def test_capacity_error_is_field_keyed(self):
        self.client.force_authenticate(self.admin)
        create_student(hostel=self.hostel, registration_number='S1', student_name='First', room=self.room)

        response = self.client.post(
            reverse('student-list'),
            {
                'hostel': self.hostel.pk,
                'registration_number': 'S2',
                'student_name': 'Second',
                'room': self.room.pk,
            },
            format='json',
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('room', response.data)

    def test_delete_deactivates_instead_of_removing(self):
        self.client.force_authenticate(self.admin)
        student = create_student(hostel=self.hostel, registration_number='S3', student_name='Third', room=self.room)

        response = self.client.delete(reverse('student-detail', args=[student.pk]))

        self.assertEqual(response.status_code, 204)
        student.refresh_from_db()
        self.assertFalse(student.is_active)

    def test_student_sees_own_profile(self):
        user = self.user_model.objects.create_user(username='sita', password='pass12345', role='student')
        create_student(hostel=self.hostel, registration_number='S4', student_name='Sita', room=self.room, user=user)
        self.client.force_authenticate(user)

        response = self.client.get(reverse('student_me'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['student_name'], 'Sita')
        self.assertEqual(response.data['room_number'], '101')

    def test_financial_summary(self):
        self.client.force_authenticate(self.admin)
        student = create_student(hostel=self.hostel, registration_number='S5', student_name='Fifth')
        StudentFinancial.objects.create(
            student=student,
            monthly_fee=Decimal('6000.00'),
            initial_balance=Decimal('10000.00'),
        )

        response = self.client.get(reverse('student-financial-summary', args=[student.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['remaining_balance'], Decimal('10000.00'))
        self.assertEqual(response.data['status'], 'pending')
