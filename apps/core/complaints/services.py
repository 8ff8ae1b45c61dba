from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from apps.core.staff.models import Staff
from apps.core.students.models import Student
from apps.core.utils.exceptions import state_error

from .models import Chat, Complain
from .senders import (
    SENDER_ADMIN,
    SENDER_STAFF,
    SENDER_STUDENT,
    AdminSender,
    Sender,
    StaffSender,
    StudentSender,
    owner_sender,
)

logger = logging.getLogger(__name__)

STATUS_TRANSITIONS = {
    Complain.STATUS_PENDING: {Complain.STATUS_IN_PROGRESS, Complain.STATUS_REJECTED},
    Complain.STATUS_IN_PROGRESS: {Complain.STATUS_RESOLVED},
    Complain.STATUS_RESOLVED: set(),
    Complain.STATUS_REJECTED: set(),
}


def _edit_window() -> timedelta:
    return timedelta(minutes=int(getattr(settings, 'CHAT_EDIT_WINDOW_MINUTES', 15)))


def _delete_window() -> timedelta:
    return timedelta(minutes=int(getattr(settings, 'CHAT_DELETE_WINDOW_MINUTES', 15)))


def _max_message_length() -> int:
    return int(getattr(settings, 'CHAT_MESSAGE_MAX_LENGTH', 1000))


# Complaints


def complaints_for_sender(sender: Sender):
    queryset = Complain.objects.select_related('student', 'staff')
    if isinstance(sender, AdminSender):
        return queryset
    if isinstance(sender, StudentSender):
        return queryset.filter(student_id=sender.id)
    return queryset.filter(staff_id=sender.id)


def owner_kwargs(sender: Sender) -> dict:
    if isinstance(sender, StudentSender):
        return {'student': Student.objects.get(pk=sender.id)}
    if isinstance(sender, StaffSender):
        return {'staff': Staff.objects.get(pk=sender.id)}
    raise ValidationError('Only students and staff can open complaints.')


def ensure_can_access(complain: Complain, sender: Sender) -> None:
    if isinstance(sender, AdminSender):
        return
    if sender != owner_sender(complain):
        raise PermissionDenied('You can only access your own complaints.')


@transaction.atomic
def create_complain(*, title: str, description: str, student=None, staff=None, **fields) -> Complain:
    complain = Complain(student=student, staff=staff, title=title, description=description, **fields)
    complain.full_clean()
    complain.save()
    logger.info('Complaint %s opened by %s', complain.pk, complain.owner_type)
    return complain


@transaction.atomic
def update_complain_status(complain: Complain, new_status: str) -> Complain:
    complain = Complain.objects.select_for_update().get(pk=complain.pk)
    if new_status not in dict(Complain.STATUS_CHOICES):
        raise ValidationError({'status': f'Unknown status {new_status!r}.'})
    if new_status not in STATUS_TRANSITIONS[complain.status]:
        raise state_error(f'Cannot move a complaint from {complain.status} to {new_status}.', 'status')

    complain.status = new_status
    complain.save(update_fields=['status', 'updated_at'])
    logger.info('Complaint %s moved to %s', complain.pk, new_status)
    return complain


# Counters


def recount_counters(complain: Complain) -> Complain:
    """Recompute the denormalized message counters from the thread itself."""
    visible = complain.chats.filter(is_deleted=False)
    unread = Q(is_read=False)
    totals = visible.aggregate(
        total=Count('id'),
        unread_from_owner=Count('id', filter=unread & Q(sender_type=complain.owner_type)),
        unread_from_admin=Count('id', filter=unread & Q(sender_type=SENDER_ADMIN)),
    )
    last_message = visible.order_by('-created_at', '-id').first()

    complain.total_messages = totals['total']
    complain.unread_admin_messages = totals['unread_from_owner']
    complain.unread_student_messages = totals['unread_from_admin'] if complain.owner_type == SENDER_STUDENT else 0
    complain.unread_staff_messages = totals['unread_from_admin'] if complain.owner_type == SENDER_STAFF else 0
    complain.last_message_at = last_message.created_at if last_message else None
    complain.last_message_by = last_message.sender_type if last_message else ''
    complain.save(update_fields=[
        'total_messages',
        'unread_admin_messages',
        'unread_student_messages',
        'unread_staff_messages',
        'last_message_at',
        'last_message_by',
        'updated_at',
    ])
    return complain


def unread_count_for(sender: Sender) -> int:
    complaints = complaints_for_sender(sender)
    if isinstance(sender, AdminSender):
        field = 'unread_admin_messages'
    elif isinstance(sender, StudentSender):
        field = 'unread_student_messages'
    else:
        field = 'unread_staff_messages'
    return complaints.aggregate(total=Sum(field))['total'] or 0


# Messages


def _elapsed(chat: Chat, now=None) -> timedelta:
    return (now or timezone.now()) - chat.created_at


def can_edit(chat: Chat, sender: Sender, now=None) -> bool:
    return (
        chat.sender == sender
        and not chat.is_deleted
        and not chat.is_edited
        and _elapsed(chat, now) <= _edit_window()
    )


def can_delete(chat: Chat, sender: Sender, now=None) -> bool:
    return (
        chat.sender == sender
        and not chat.is_deleted
        and _elapsed(chat, now) <= _delete_window()
    )


def edit_time_remaining(chat: Chat, sender: Sender, now=None) -> int:
    if not can_edit(chat, sender, now):
        return 0
    return max(0, int((_edit_window() - _elapsed(chat, now)).total_seconds()))


def messages_for(complain: Complain):
    return complain.chats.select_related('sent_by').order_by('created_at', 'id')


@transaction.atomic
def send_message(
    *,
    complain: Complain,
    sender: Sender,
    message: str = '',
    message_type: str = Chat.TYPE_TEXT,
    attachment=None,
    sent_by=None,
) -> Chat:
    ensure_can_access(complain, sender)

    message = (message or '').strip()
    if not message and not attachment:
        raise ValidationError({'message': 'Message cannot be empty.'})
    if len(message) > _max_message_length():
        raise ValidationError({'message': f'Message cannot exceed {_max_message_length()} characters.'})

    chat = Chat(
        complain=complain,
        sender_type=sender.sender_type,
        sender_id=sender.sender_id,
        sent_by=sent_by,
        message=message,
        message_type=message_type,
        attachment=attachment,
    )
    chat.full_clean()
    chat.save()
    recount_counters(complain)
    return chat


@transaction.atomic
def edit_message(chat: Chat, *, sender: Sender, message: str, now=None) -> Chat:
    chat = Chat.objects.select_for_update().get(pk=chat.pk)
    if chat.sender != sender:
        raise PermissionDenied('Only the sender can edit this message.')
    if chat.is_deleted:
        raise state_error('Deleted messages cannot be edited.', 'message')
    if chat.is_edited:
        raise state_error('This message has already been edited.', 'message')
    if _elapsed(chat, now) > _edit_window():
        raise state_error('The edit window for this message has closed.', 'message')

    message = (message or '').strip()
    if not message:
        raise ValidationError({'message': 'Message cannot be empty.'})
    if len(message) > _max_message_length():
        raise ValidationError({'message': f'Message cannot exceed {_max_message_length()} characters.'})

    chat.original_message = chat.message
    chat.message = message
    chat.is_edited = True
    chat.edited_at = now or timezone.now()
    chat.save(update_fields=['original_message', 'message', 'is_edited', 'edited_at', 'updated_at'])
    return chat


@transaction.atomic
def delete_message(chat: Chat, *, sender: Sender, now=None) -> Chat:
    chat = Chat.objects.select_for_update().get(pk=chat.pk)
    if chat.sender != sender:
        raise PermissionDenied('Only the sender can delete this message.')
    if chat.is_deleted:
        raise state_error('This message has already been deleted.', 'message')
    if _elapsed(chat, now) > _delete_window():
        raise state_error('The delete window for this message has closed.', 'message')

    chat.is_deleted = True
    chat.deleted_at = now or timezone.now()
    chat.save(update_fields=['is_deleted', 'deleted_at', 'updated_at'])
    recount_counters(chat.complain)
    return chat


def _unread_for_reader(complain: Complain, reader: Sender):
    """Messages addressed to the reader: owner messages for the admin, admin messages for the owner."""
    unread = complain.chats.filter(is_read=False, is_deleted=False)
    if isinstance(reader, AdminSender):
        return unread.filter(sender_type=complain.owner_type)
    return unread.filter(sender_type=SENDER_ADMIN)


@transaction.atomic
def mark_read(chat: Chat, *, reader: Sender) -> Chat:
    ensure_can_access(chat.complain, reader)
    if chat.is_read or chat.sender == reader:
        return chat

    chat.is_read = True
    chat.read_at = timezone.now()
    chat.save(update_fields=['is_read', 'read_at', 'updated_at'])
    recount_counters(chat.complain)
    return chat


@transaction.atomic
def mark_thread_read(complain: Complain, *, reader: Sender) -> int:
    ensure_can_access(complain, reader)
    updated = _unread_for_reader(complain, reader).update(is_read=True, read_at=timezone.now())
    recount_counters(complain)
    return updated
