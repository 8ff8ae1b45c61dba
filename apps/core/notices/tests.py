from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from apps.core.hostels.models import Block, Hostel
from apps.core.hostels.services import create_room
from apps.core.staff.services import create_staff
from apps.core.students.services import create_student

from .models import Notice
from .services import create_notice, notices_for_occupant


class NoticeAudienceTests(TestCase):
    def setUp(self):
        self.hostel = Hostel.objects.create(name='Notice Hostel')
        self.other_hostel = Hostel.objects.create(name='Far Hostel')
        self.block_a = Block.objects.create(hostel=self.hostel, block_name='A')
        self.block_b = Block.objects.create(hostel=self.hostel, block_name='B')
        room = create_room(block=self.block_a, room_number='A1', capacity=2)

        self.student = create_student(hostel=self.hostel, registration_number='S1', student_name='Asha', room=room)
        self.other_student = create_student(hostel=self.hostel, registration_number='S2', student_name='Bina')
        self.staff = create_staff(hostel=self.hostel, employee_id='E1', staff_name='Ram')

    def _notice(self, title, **fields):
        return create_notice(hostel=self.hostel, title=title, description=f'{title} details', **fields)

    def _titles(self, occupant, now=None):
        return set(notices_for_occupant(occupant, now=now).values_list('title', flat=True))

    def test_students_see_their_audiences(self):
        self._notice('Everyone')
        self._notice('Students', target_type=Notice.TARGET_STUDENTS)
        self._notice('Staff only', target_type=Notice.TARGET_STAFF)
        self._notice('Just Asha', target_type=Notice.TARGET_STUDENT, student=self.student)
        self._notice('Block A', target_type=Notice.TARGET_BLOCK, block=self.block_a)
        self._notice('Block B', target_type=Notice.TARGET_BLOCK, block=self.block_b)
        self._notice('Draft', status=Notice.STATUS_INACTIVE)

        self.assertEqual(self._titles(self.student), {'Everyone', 'Students', 'Just Asha', 'Block A'})
        self.assertEqual(self._titles(self.other_student), {'Everyone', 'Students'})
        self.assertEqual(self._titles(self.staff), {'Everyone', 'Staff only'})

    def test_other_hostel_notices_are_hidden(self):
        create_notice(hostel=self.other_hostel, title='Far away', description='Not here')
        self.assertEqual(self._titles(self.student), set())

    def test_scheduled_notice_appears_after_schedule_time(self):
        now = timezone.now()
        self._notice('Later', schedule_time=now + timedelta(hours=2))

        self.assertEqual(self._titles(self.student, now=now), set())
        self.assertEqual(self._titles(self.student, now=now + timedelta(hours=3)), {'Later'})

    def test_specific_target_requires_its_record(self):
        with self.assertRaises(ValidationError) as ctx:
            self._notice('Missing student', target_type=Notice.TARGET_STUDENT)
        self.assertIn('student', ctx.exception.message_dict)

    def test_target_must_belong_to_notice_hostel(self):
        with self.assertRaises(ValidationError) as ctx:
            create_notice(
                hostel=self.other_hostel,
                title='Wrong hostel',
                description='Mismatch',
                target_type=Notice.TARGET_STUDENT,
                student=self.student,
            )
        self.assertIn('student', ctx.exception.message_dict)


class NoticeApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        user_model = get_user_model()
        self.admin = user_model.objects.create_user(username='warden', password='pass12345', role='admin')
        self.student_user = user_model.objects.create_user(username='asha', password='pass12345', role='student')
        self.hostel = Hostel.objects.create(name='Notice API Hostel')
        create_student(hostel=self.hostel, registration_number='S1', student_name='Asha', user=self.student_user)

    def test_admin_publishes_and_student_reads(self):
        self.client.force_authenticate(self.admin)
        created = self.client.post(
            reverse('notice-list'),
            {'hostel': self.hostel.pk, 'title': 'Water cut', 'description': 'Tomorrow 9-11am.'},
            format='json',
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(Notice.objects.get(pk=created.data['id']).created_by, self.admin)

        self.client.force_authenticate(self.student_user)
        response = self.client.get(reverse('my_notices'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['title'], 'Water cut')

    def test_student_cannot_publish(self):
        self.client.force_authenticate(self.student_user)

        response = self.client.post(
            reverse('notice-list'),
            {'hostel': self.hostel.pk, 'title': 'Party', 'description': 'Room 5.'},
            format='json',
        )

        self.assertEqual(response.status_code, 403)
