from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from apps.core.hostels.models import Hostel
from apps.core.hostels.services import create_block, create_room
from apps.core.staff.services import create_staff

from .models import SEATER_DOUBLE, Inquiry, InquirySeater
from .services import create_inquiry, create_inquiry_seater, update_inquiry


class InquiryServiceTests(TestCase):
    def setUp(self):
        self.hostel = Hostel.objects.create(name='Inquiry Hostel')
        self.other_hostel = Hostel.objects.create(name='Other Hostel')
        self.block_a = create_block(hostel=self.hostel, block_name='A')
        self.block_b = create_block(hostel=self.hostel, block_name='B')
        self.room_a = create_room(block=self.block_a, room_number='A1', capacity=2)
        self.room_b = create_room(block=self.block_b, room_number='B1', capacity=2)

    def test_phone_is_required(self):
        with self.assertRaises(ValidationError) as ctx:
            create_inquiry(hostel=self.hostel, name='Prakash', phone='  ')
        self.assertIn('phone', ctx.exception.message_dict)

    def test_block_must_belong_to_inquiry_hostel(self):
        with self.assertRaises(ValidationError) as ctx:
            create_inquiry(hostel=self.other_hostel, name='Prakash', phone='9800000001', block=self.block_a)
        self.assertIn('block', ctx.exception.message_dict)

    def test_offered_room_must_be_in_requested_block(self):
        inquiry = create_inquiry(hostel=self.hostel, name='Prakash', phone='9800000001', block=self.block_a)

        with self.assertRaises(ValidationError) as ctx:
            create_inquiry_seater(inquiry=inquiry, room=self.room_b, seater_type=SEATER_DOUBLE)
        self.assertIn('room', ctx.exception.message_dict)

        seater = create_inquiry_seater(inquiry=inquiry, room=self.room_a, seater_type=SEATER_DOUBLE)
        self.assertEqual(seater.block, self.block_a)
        self.assertEqual(seater.seater_label, 'Double Seater')

    def test_unknown_seater_code_has_fallback_label(self):
        self.assertEqual(InquirySeater(seater_type=9).seater_label, 'Unknown')

    def test_moving_inquiry_away_from_offered_rooms_is_rejected(self):
        inquiry = create_inquiry(hostel=self.hostel, name='Prakash', phone='9800000001', block=self.block_a)
        create_inquiry_seater(inquiry=inquiry, room=self.room_a, seater_type=SEATER_DOUBLE)

        with self.assertRaises(ValidationError) as ctx:
            update_inquiry(inquiry, block=self.block_b)
        self.assertIn('block', ctx.exception.message_dict)

        inquiry.refresh_from_db()
        self.assertEqual(inquiry.block, self.block_a)


class InquiryApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user_model = get_user_model()
        self.admin = self.user_model.objects.create_user(username='admin', password='pass12345', role='admin')
        self.hostel = Hostel.objects.create(name='Inquiry API Hostel')
        self.block = create_block(hostel=self.hostel, block_name='A')
        self.room = create_room(block=self.block, room_number='101', capacity=2)

    def _desk_staff(self, username, employee_id):
        user = self.user_model.objects.create_user(username=username, password='pass12345', role='staff')
        staff = create_staff(hostel=self.hostel, employee_id=employee_id, staff_name=username.title(), user=user)
        return user, staff

    def test_inquiries_by_block(self):
        self.client.force_authenticate(self.admin)
        create_inquiry(hostel=self.hostel, name='Hemant', phone='9800000002', block=self.block)
        create_inquiry(hostel=self.hostel, name='Isha', phone='9800000003')

        response = self.client.get(reverse('inquiry-by-block', args=[self.block.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([row['name'] for row in response.data], ['Hemant'])

    def test_inquiries_by_unknown_block_returns_404(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse('inquiry-by-block', args=[9999]))

        self.assertEqual(response.status_code, 404)

    def test_seaters_by_inquiry_and_by_room(self):
        self.client.force_authenticate(self.admin)
        inquiry = create_inquiry(hostel=self.hostel, name='Hemant', phone='9800000002', block=self.block)

        response = self.client.post(
            reverse('inquiry-seater-list'),
            {'inquiry': inquiry.pk, 'room': self.room.pk, 'seater_type': SEATER_DOUBLE, 'notes': 'Window side'},
            format='json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['seater_label'], 'Double Seater')
        self.assertEqual(response.data['block'], self.block.pk)

        by_inquiry = self.client.get(reverse('inquiry-seater-by-inquiry', args=[inquiry.pk]))
        by_room = self.client.get(reverse('inquiry-seater-by-room', args=[self.room.pk]))

        self.assertEqual(len(by_inquiry.data), 1)
        self.assertEqual(by_room.data[0]['inquiry'], inquiry.pk)

    def test_staff_inquiries_are_recorded_and_scoped(self):
        user, staff = self._desk_staff('kiran', 'E1')
        _, colleague = self._desk_staff('laxmi', 'E2')
        create_inquiry(hostel=self.hostel, name='Someone else', phone='9800000009', recorded_by=colleague)
        self.client.force_authenticate(user)

        response = self.client.post(
            reverse('inquiry-list'),
            {'hostel': self.hostel.pk, 'name': 'Manish', 'phone': '9800000004', 'seater_type': 1},
            format='json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(Inquiry.objects.get(pk=response.data['id']).recorded_by, staff)

        response = self.client.get(reverse('inquiry-list'))

        self.assertEqual([row['name'] for row in response.data['results']], ['Manish'])

    def test_staff_cannot_offer_rooms_on_colleague_inquiry(self):
        user, _ = self._desk_staff('kiran', 'E1')
        _, colleague = self._desk_staff('laxmi', 'E2')
        inquiry = create_inquiry(hostel=self.hostel, name='Nabin', phone='9800000005', recorded_by=colleague)
        self.client.force_authenticate(user)

        response = self.client.post(
            reverse('inquiry-seater-list'),
            {'inquiry': inquiry.pk, 'room': self.room.pk, 'seater_type': 1},
            format='json',
        )

        self.assertEqual(response.status_code, 403)
        self.assertFalse(inquiry.seaters.exists())

    def test_students_cannot_read_inquiries(self):
        student_user = self.user_model.objects.create_user(username='student', password='pass12345', role='student')
        self.client.force_authenticate(student_user)

        response = self.client.get(reverse('inquiry-list'))

        self.assertEqual(response.status_code, 403)
