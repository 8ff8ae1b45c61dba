from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from apps.core.hostels.services import ensure_room_has_space, refresh_room_status

from .models import Student

logger = logging.getLogger(__name__)


def _ensure_user_not_linked(user, exclude=None):
    if user is None:
        return
    queryset = Student.objects.filter(user=user)
    if exclude is not None and exclude.pk:
        queryset = queryset.exclude(pk=exclude.pk)
    if queryset.exists():
        raise ValidationError({'user': 'User is already linked to another student record.'})


def _guard_room_assignment(student: Student) -> None:
    if student.room_id and student.is_active:
        ensure_room_has_space(room=student.room, student=student)


@transaction.atomic
def create_student(*, hostel, registration_number: str, student_name: str, **fields) -> Student:
    _ensure_user_not_linked(fields.get('user'))

    student = Student(
        hostel=hostel,
        registration_number=registration_number,
        student_name=student_name,
        **fields,
    )
    student.full_clean()
    _guard_room_assignment(student)
    student.save()

    if student.room_id:
        refresh_room_status(student.room)
    logger.info('Created student %s in hostel %s (room=%s)', student.pk, hostel.pk, student.room_id)
    return student


@transaction.atomic
def update_student(student: Student, **changes) -> Student:
    if 'user' in changes:
        _ensure_user_not_linked(changes['user'], exclude=student)

    previous_room = student.room
    for field, value in changes.items():
        setattr(student, field, value)
    student.full_clean()

    room_changed = previous_room is None or previous_room.pk != student.room_id
    if room_changed or 'is_active' in changes or 'hostel' in changes:
        _guard_room_assignment(student)
    student.save()

    if previous_room is not None and previous_room.pk != student.room_id:
        refresh_room_status(previous_room)
    if student.room_id:
        refresh_room_status(student.room)
    return student


@transaction.atomic
def assign_room(student: Student, room) -> Student:
    return update_student(student, room=room)


@transaction.atomic
def deactivate_student(student: Student) -> Student:
    """Deactivation frees the bed but keeps the record for financial history."""
    previous_room = student.room
    student.is_active = False
    student.room = None
    student.save(update_fields=['is_active', 'room', 'updated_at'])

    if previous_room is not None:
        refresh_room_status(previous_room)
    logger.info('Deactivated student %s', student.pk)
    return student


def student_for_user(user) -> Student:
    student = (
        Student.objects.select_related('hostel', 'room', 'room__block')
        .filter(user=user, is_active=True)
        .first()
    )
    if student is None:
        raise ValidationError({'user': 'No active student record is linked to this account.'})
    return student
