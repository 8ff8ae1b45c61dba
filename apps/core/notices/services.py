from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.core.staff.models import Staff
from apps.core.students.models import Student

from .models import Notice

logger = logging.getLogger(__name__)


@transaction.atomic
def create_notice(*, hostel, title: str, description: str, created_by=None, **fields) -> Notice:
    notice = Notice(hostel=hostel, title=title, description=description, created_by=created_by, **fields)
    notice.full_clean()
    notice.save()
    logger.info('Notice %s published to %s', notice.pk, notice.target_type)
    return notice


@transaction.atomic
def update_notice(notice: Notice, **changes) -> Notice:
    for field, value in changes.items():
        setattr(notice, field, value)
    notice.full_clean()
    notice.save()
    return notice


def _published(now=None):
    now = now or timezone.now()
    return Notice.objects.filter(status=Notice.STATUS_ACTIVE).filter(
        Q(schedule_time__isnull=True) | Q(schedule_time__lte=now)
    )


def notices_for_occupant(occupant, now=None):
    queryset = _published(now).filter(hostel=occupant.hostel)

    if isinstance(occupant, Student):
        audience = (
            Q(target_type=Notice.TARGET_ALL)
            | Q(target_type=Notice.TARGET_STUDENTS)
            | Q(target_type=Notice.TARGET_STUDENT, student=occupant)
        )
        if occupant.room_id:
            audience |= Q(target_type=Notice.TARGET_BLOCK, block_id=occupant.room.block_id)
    elif isinstance(occupant, Staff):
        audience = (
            Q(target_type=Notice.TARGET_ALL)
            | Q(target_type=Notice.TARGET_STAFF)
            | Q(target_type=Notice.TARGET_STAFF_MEMBER, staff=occupant)
        )
    else:
        raise TypeError(f'Unsupported occupant type: {type(occupant).__name__}')

    return queryset.filter(audience)


def notices_for_user(user, now=None):
    student = Student.objects.filter(user=user, is_active=True).select_related('room').first()
    if student is not None:
        return notices_for_occupant(student, now)

    staff = Staff.objects.filter(user=user, is_active=True).first()
    if staff is not None:
        return notices_for_occupant(staff, now)

    raise ValidationError({'user': 'No active student or staff record is linked to this account.'})
