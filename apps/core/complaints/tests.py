import shutil
import tempfile
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied, ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from apps.core.hostels.models import Hostel
from apps.core.staff.services import create_staff
from apps.core.students.services import create_student
from apps.core.utils.exceptions import STATE_ERROR_CODE

from .models import Chat, Complain
from .senders import AdminSender, StaffSender, StudentSender, sender_for_user
from .services import (
    can_edit,
    create_complain,
    delete_message,
    edit_message,
    edit_time_remaining,
    mark_read,
    mark_thread_read,
    send_message,
    unread_count_for,
    update_complain_status,
)


class ComplaintBaseTestCase(TestCase):
    def setUp(self):
        user_model = get_user_model()
        self.admin_user = user_model.objects.create_user(username='warden', password='pass12345', role='admin')
        self.student_user = user_model.objects.create_user(username='asha', password='pass12345', role='student')
        self.other_user = user_model.objects.create_user(username='bina', password='pass12345', role='student')

        self.hostel = Hostel.objects.create(name='Complaint Hostel')
        self.student = create_student(
            hostel=self.hostel,
            registration_number='S1',
            student_name='Asha',
            user=self.student_user,
        )
        self.other_student = create_student(
            hostel=self.hostel,
            registration_number='S2',
            student_name='Bina',
            user=self.other_user,
        )
        self.staff = create_staff(hostel=self.hostel, employee_id='E1', staff_name='Ram')

        self.admin = AdminSender()
        self.owner = StudentSender(self.student.pk)
        self.complain = create_complain(student=self.student, title='Leaking tap', description='Bathroom tap leaks.')


class SenderTests(ComplaintBaseTestCase):
    def test_sender_resolved_from_login(self):
        self.assertEqual(sender_for_user(self.admin_user), AdminSender())
        self.assertEqual(sender_for_user(self.student_user), StudentSender(self.student.pk))

    def test_admin_messages_carry_no_id(self):
        chat = send_message(complain=self.complain, sender=self.admin, message='Plumber is on the way.')

        self.assertEqual(chat.sender_type, 'admin')
        self.assertIsNone(chat.sender_id)
        self.assertEqual(chat.sender, self.admin)

    def test_complaint_needs_exactly_one_owner(self):
        with self.assertRaises(ValidationError):
            create_complain(title='Noise', description='Too loud.')
        with self.assertRaises(ValidationError):
            create_complain(student=self.student, staff=self.staff, title='Noise', description='Too loud.')


class MessageWindowTests(ComplaintBaseTestCase):
    def setUp(self):
        super().setUp()
        self.chat = send_message(complain=self.complain, sender=self.owner, message='Still leaking')

    def test_edit_inside_window(self):
        now = self.chat.created_at + timedelta(minutes=14)
        self.assertTrue(can_edit(self.chat, self.owner, now=now))
        self.assertEqual(edit_time_remaining(self.chat, self.owner, now=now), 60)

        chat = edit_message(self.chat, sender=self.owner, message='Still leaking badly', now=now)

        self.assertTrue(chat.is_edited)
        self.assertEqual(chat.original_message, 'Still leaking')
        self.assertEqual(chat.display_message, 'Still leaking badly (edited)')

    def test_edit_after_window_is_rejected(self):
        now = self.chat.created_at + timedelta(minutes=16)
        self.assertFalse(can_edit(self.chat, self.owner, now=now))

        with self.assertRaises(ValidationError) as ctx:
            edit_message(self.chat, sender=self.owner, message='Too late', now=now)
        self.assertEqual(ctx.exception.error_dict['message'][0].code, STATE_ERROR_CODE)

    def test_message_can_only_be_edited_once(self):
        now = self.chat.created_at + timedelta(minutes=1)
        edit_message(self.chat, sender=self.owner, message='Second version', now=now)

        with self.assertRaises(ValidationError):
            edit_message(self.chat, sender=self.owner, message='Third version', now=now)

    def test_only_sender_can_edit_or_delete(self):
        with self.assertRaises(PermissionDenied):
            edit_message(self.chat, sender=self.admin, message='Hijack')
        with self.assertRaises(PermissionDenied):
            delete_message(self.chat, sender=self.admin)

    @override_settings(CHAT_EDIT_WINDOW_MINUTES=5)
    def test_edit_window_follows_settings(self):
        now = self.chat.created_at + timedelta(minutes=6)
        self.assertFalse(can_edit(self.chat, self.owner, now=now))

    def test_delete_leaves_placeholder(self):
        now = self.chat.created_at + timedelta(minutes=10)

        chat = delete_message(self.chat, sender=self.owner, now=now)

        self.assertTrue(chat.is_deleted)
        self.assertEqual(chat.display_message, 'Message deleted')
        self.assertTrue(Chat.objects.filter(pk=chat.pk).exists())
        self.complain.refresh_from_db()
        self.assertEqual(self.complain.total_messages, 0)

    def test_delete_after_window_is_rejected(self):
        with self.assertRaises(ValidationError):
            delete_message(self.chat, sender=self.owner, now=self.chat.created_at + timedelta(minutes=16))

    def test_deleted_message_cannot_be_edited(self):
        delete_message(self.chat, sender=self.owner)

        with self.assertRaises(ValidationError):
            edit_message(self.chat, sender=self.owner, message='Back again')


class UnreadCounterTests(ComplaintBaseTestCase):
    def test_owner_messages_count_as_unread_for_admin(self):
        for text in ('One', 'Two', 'Three'):
            send_message(complain=self.complain, sender=self.owner, message=text)

        self.complain.refresh_from_db()
        self.assertEqual(self.complain.total_messages, 3)
        self.assertEqual(self.complain.unread_admin_messages, 3)
        self.assertEqual(self.complain.unread_student_messages, 0)
        self.assertEqual(self.complain.last_message_by, 'student')
        self.assertEqual(unread_count_for(self.admin), 3)

        marked = mark_thread_read(self.complain, reader=self.admin)

        self.complain.refresh_from_db()
        self.assertEqual(marked, 3)
        self.assertEqual(self.complain.unread_admin_messages, 0)
        self.assertEqual(self.complain.unread_student_messages, 0)
        self.assertEqual(self.complain.unread_staff_messages, 0)

    def test_admin_reply_counts_for_owner(self):
        chat = send_message(complain=self.complain, sender=self.admin, message='Fixed?')

        self.assertEqual(unread_count_for(self.owner), 1)

        mark_read(chat, reader=self.owner)
        first_read_at = Chat.objects.get(pk=chat.pk).read_at
        mark_read(chat, reader=self.owner)

        self.complain.refresh_from_db()
        self.assertEqual(self.complain.unread_student_messages, 0)
        self.assertEqual(Chat.objects.get(pk=chat.pk).read_at, first_read_at)

    def test_sender_reading_own_message_changes_nothing(self):
        chat = send_message(complain=self.complain, sender=self.owner, message='Hello')

        mark_read(chat, reader=self.owner)

        chat.refresh_from_db()
        self.assertFalse(chat.is_read)

    def test_staff_owned_thread_uses_staff_counter(self):
        complain = create_complain(staff=self.staff, title='Broken chair', description='Office chair.')
        send_message(complain=complain, sender=self.admin, message='Ordered a new one.')

        complain.refresh_from_db()
        self.assertEqual(complain.unread_staff_messages, 1)
        self.assertEqual(complain.unread_student_messages, 0)
        self.assertEqual(unread_count_for(StaffSender(self.staff.pk)), 1)

    def test_other_student_cannot_post(self):
        with self.assertRaises(PermissionDenied):
            send_message(complain=self.complain, sender=StudentSender(self.other_student.pk), message='Me too')

    def test_empty_message_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            send_message(complain=self.complain, sender=self.owner, message='   ')
        self.assertIn('message', ctx.exception.message_dict)


class ComplainStatusTests(ComplaintBaseTestCase):
    def test_pending_to_in_progress_to_resolved(self):
        complain = update_complain_status(self.complain, Complain.STATUS_IN_PROGRESS)
        complain = update_complain_status(complain, Complain.STATUS_RESOLVED)
        self.assertEqual(complain.status, Complain.STATUS_RESOLVED)

    def test_resolved_complaint_cannot_reopen(self):
        complain = update_complain_status(self.complain, Complain.STATUS_REJECTED)

        with self.assertRaises(ValidationError) as ctx:
            update_complain_status(complain, Complain.STATUS_IN_PROGRESS)
        self.assertEqual(ctx.exception.error_dict['status'][0].code, STATE_ERROR_CODE)


TEST_MEDIA_ROOT = tempfile.mkdtemp(prefix='complaints_tests_')


@override_settings(MEDIA_ROOT=TEST_MEDIA_ROOT)
class ComplaintApiTests(ComplaintBaseTestCase):
    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(TEST_MEDIA_ROOT, ignore_errors=True)

    def setUp(self):
        super().setUp()
        self.client = APIClient()

    def test_student_opens_complaint_and_chats(self):
        self.client.force_authenticate(self.student_user)

        created = self.client.post(
            reverse('my_complains'),
            {'title': 'No hot water', 'description': 'Since Monday.'},
            format='json',
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.data['owner_type'], 'student')

        sent = self.client.post(
            reverse('chat_send'),
            {'complain_id': created.data['id'], 'message': 'Any update?'},
            format='json',
        )
        self.assertEqual(sent.status_code, 201)
        self.assertTrue(sent.data['is_mine'])
        self.assertTrue(sent.data['can_edit'])

        thread = self.client.get(reverse('chat_thread', args=[created.data['id']]))
        self.assertEqual(len(thread.data['messages']), 1)

    def test_other_student_gets_403_on_thread(self):
        self.client.force_authenticate(self.other_user)

        response = self.client.get(reverse('chat_thread', args=[self.complain.pk]))

        self.assertEqual(response.status_code, 403)

    def test_second_edit_returns_conflict(self):
        chat = send_message(complain=self.complain, sender=self.owner, message='First')
        self.client.force_authenticate(self.student_user)
        url = reverse('chat_edit', args=[chat.pk])

        first = self.client.post(url, {'message': 'Second'}, format='json')
        second = self.client.post(url, {'message': 'Third'}, format='json')

        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.data['message'], 'Second (edited)')
        self.assertEqual(second.status_code, 409)

    def test_delete_returns_placeholder(self):
        chat = send_message(complain=self.complain, sender=self.owner, message='Oops')
        self.client.force_authenticate(self.student_user)

        response = self.client.delete(reverse('chat_detail', args=[chat.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Message deleted')

    def test_deleted_attachment_is_hidden(self):
        chat = send_message(
            complain=self.complain,
            sender=self.owner,
            message_type=Chat.TYPE_FILE,
            attachment=SimpleUploadedFile('leak.txt', b'drip', content_type='text/plain'),
        )
        self.client.force_authenticate(self.student_user)

        response = self.client.delete(reverse('chat_detail', args=[chat.pk]))

        self.assertEqual(response.data['message'], 'Message deleted')
        self.assertIsNone(response.data['attachment'])
        self.assertEqual(response.data['message_type'], Chat.TYPE_TEXT)
        chat.refresh_from_db()
        self.assertTrue(chat.attachment.name.startswith('chats/'))

    def test_admin_marks_thread_read_and_changes_status(self):
        send_message(complain=self.complain, sender=self.owner, message='Hello')
        self.client.force_authenticate(self.admin_user)

        self.assertEqual(self.client.get(reverse('chat_unread_count')).data['unread_count'], 1)
        marked = self.client.post(reverse('chat_mark_read'), {'complain_id': self.complain.pk}, format='json')
        self.assertEqual(marked.data['marked_read'], 1)
        self.assertEqual(self.client.get(reverse('chat_unread_count')).data['unread_count'], 0)

        url = reverse('complain-change-status', args=[self.complain.pk])
        self.assertEqual(self.client.post(url, {'status': 'resolved'}, format='json').status_code, 409)
        response = self.client.post(url, {'status': 'in_progress'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], 'in_progress')
