from datetime import timedelta
from decimal import Decimal
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from apps.core.attendance.services import create_checkout_rule, record_checkout
from apps.core.staff.services import create_staff
from apps.core.students.services import create_student

from .models import Block, Hostel, Room
from .services import (
    available_rooms,
    create_block,
    create_room,
    delete_block,
    delete_room,
    update_room,
)


class RoomGuardTests(TestCase):
    def setUp(self):
        self.hostel = Hostel.objects.create(name='North Hostel')
        self.other_hostel = Hostel.objects.create(name='South Hostel')
        self.block = create_block(hostel=self.hostel, block_name='A')
        self.other_block = create_block(hostel=self.other_hostel, block_name='B')

    def test_room_defaults_to_block_hostel(self):
        room = create_room(block=self.block, room_number='101', capacity=2)
        self.assertEqual(room.hostel, self.hostel)

    def test_room_block_must_match_hostel(self):
        with self.assertRaises(ValidationError) as ctx:
            create_room(block=self.other_block, hostel=self.hostel, room_number='102', capacity=2)
        self.assertIn('block', ctx.exception.message_dict)

    def test_room_capacity_must_be_positive(self):
        with self.assertRaises(ValidationError) as ctx:
            create_room(block=self.block, room_number='103', capacity=0)
        self.assertIn('capacity', ctx.exception.message_dict)

    def test_capacity_cannot_drop_below_occupancy(self):
        room = create_room(block=self.block, room_number='104', capacity=3)
        create_student(hostel=self.hostel, registration_number='S1', student_name='Asha', room=room)
        create_student(hostel=self.hostel, registration_number='S2', student_name='Bina', room=room)

        with self.assertRaises(ValidationError) as ctx:
            update_room(room, capacity=1)
        self.assertIn('capacity', ctx.exception.message_dict)

        room = update_room(room, capacity=2)
        self.assertEqual(room.capacity, 2)
        self.assertEqual(room.status, Room.STATUS_OCCUPIED)

    def test_room_cannot_move_to_block_of_other_hostel(self):
        room = create_room(block=self.block, room_number='105', capacity=1)
        with self.assertRaises(ValidationError) as ctx:
            update_room(room, block=self.other_block)
        self.assertIn('block', ctx.exception.message_dict)

    def test_block_with_rooms_cannot_be_deleted(self):
        create_room(block=self.block, room_number='106', capacity=1)

        with self.assertRaises(ValidationError):
            delete_block(self.block)
        self.assertTrue(Block.objects.filter(pk=self.block.pk).exists())

    def test_block_with_checkout_history_cannot_be_deleted(self):
        staff = create_staff(hostel=self.hostel, employee_id='E9', staff_name='Porter')
        record_checkout(occupant=staff, block=self.block, checkout_time=timezone.now())

        with self.assertRaises(ValidationError) as ctx:
            delete_block(self.block)
        self.assertIn('block', ctx.exception.message_dict)
        self.assertTrue(Block.objects.filter(pk=self.block.pk).exists())

    def test_empty_block_can_be_deleted(self):
        delete_block(self.other_block)
        self.assertFalse(Block.objects.filter(pk=self.other_block.pk).exists())

    def test_occupied_room_cannot_be_deleted(self):
        room = create_room(block=self.block, room_number='107', capacity=1)
        create_student(hostel=self.hostel, registration_number='S3', student_name='Chetan', room=room)

        with self.assertRaises(ValidationError):
            delete_room(room)
        self.assertTrue(Room.objects.filter(pk=room.pk).exists())

    def test_available_rooms_skip_full_and_maintenance(self):
        full = create_room(block=self.block, room_number='201', capacity=1)
        create_room(block=self.block, room_number='202', capacity=2, status=Room.STATUS_MAINTENANCE)
        open_room = create_room(block=self.block, room_number='203', capacity=2)
        create_student(hostel=self.hostel, registration_number='S4', student_name='Dev', room=full)

        rooms = list(available_rooms(hostel=self.hostel))
        self.assertEqual(rooms, [open_room])


class HostelApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = get_user_model().objects.create_user(username='admin', password='pass12345', role='admin')
        self.client.force_authenticate(self.admin)
        self.hostel = Hostel.objects.create(name='API Hostel')
        self.block = create_block(hostel=self.hostel, block_name='A')

    def test_create_room_through_api(self):
        response = self.client.post(
            reverse('room-list'),
            {'block': self.block.pk, 'room_number': '301', 'capacity': 2},
            format='json',
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['hostel'], self.hostel.pk)
        self.assertEqual(response.data['available_beds'], 2)

    def test_delete_block_with_rooms_returns_field_error(self):
        create_room(block=self.block, room_number='302', capacity=1)

        response = self.client.delete(reverse('block-detail', args=[self.block.pk]))

        self.assertEqual(response.status_code, 400)
        self.assertIn('block', response.data)

    def test_available_rooms_endpoint(self):
        create_room(block=self.block, room_number='303', capacity=1)

        response = self.client.get(reverse('room-available'), {'hostel': self.hostel.pk})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([room['room_number'] for room in response.data], ['303'])

    def test_delete_block_with_checkout_history_returns_field_error(self):
        gate = create_block(hostel=self.hostel, block_name='Gate')
        staff = create_staff(hostel=self.hostel, employee_id='E1', staff_name='Guard', salary_amount=Decimal('9000'))
        create_checkout_rule(staff=staff, active_after_days=0, percentage=Decimal('10'))
        now = timezone.now()
        record_checkout(occupant=staff, block=gate, checkout_time=now - timedelta(days=2), checkin_time=now)

        response = self.client.delete(reverse('block-detail', args=[gate.pk]))

        self.assertEqual(response.status_code, 400)
        self.assertIn('block', response.data)
        self.assertTrue(Block.objects.filter(pk=gate.pk).exists())

    def test_available_rooms_with_unknown_hostel_returns_404(self):
        create_room(block=self.block, room_number='304', capacity=1)

        response = self.client.get(reverse('room-available'), {'hostel': 99999})

        self.assertEqual(response.status_code, 404)


class SeedCommandTests(TestCase):
    def test_seed_builds_demo_hostel_once(self):
        out = StringIO()
        call_command('seed', '--blocks=1', '--rooms-per-block=2', '--students=3', '--staff=1', stdout=out)

        hostel = Hostel.objects.get(name='Demo Hostel')
        self.assertEqual(hostel.rooms.count(), 2)
        self.assertEqual(hostel.students.count(), 3)
        self.assertEqual(hostel.staff_members.count(), 1)
        self.assertTrue(get_user_model().objects.filter(username='admin', role='admin').exists())
        self.assertIn('Database seeding complete!', out.getvalue())

        call_command('seed', stdout=StringIO())
        self.assertEqual(Hostel.objects.filter(name='Demo Hostel').count(), 1)
