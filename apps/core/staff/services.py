from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from .models import Staff

logger = logging.getLogger(__name__)


def _ensure_user_not_linked(user, exclude=None):
    if user is None:
        return
    queryset = Staff.objects.filter(user=user)
    if exclude is not None and exclude.pk:
        queryset = queryset.exclude(pk=exclude.pk)
    if queryset.exists():
        raise ValidationError({'user': 'User is already linked to another staff record.'})


@transaction.atomic
def create_staff(*, hostel, employee_id: str, staff_name: str, **fields) -> Staff:
    _ensure_user_not_linked(fields.get('user'))

    staff = Staff(hostel=hostel, employee_id=employee_id, staff_name=staff_name, **fields)
    staff.full_clean()
    staff.save()
    logger.info('Created staff %s in hostel %s', staff.pk, hostel.pk)
    return staff


@transaction.atomic
def update_staff(staff: Staff, **changes) -> Staff:
    if 'user' in changes:
        _ensure_user_not_linked(changes['user'], exclude=staff)

    for field, value in changes.items():
        setattr(staff, field, value)
    staff.full_clean()
    staff.save()
    return staff


@transaction.atomic
def deactivate_staff(staff: Staff) -> Staff:
    """Staff rows carry salary and ledger history, so removal only flips the active flag."""
    if not staff.is_active:
        return staff

    staff.is_active = False
    staff.save(update_fields=['is_active', 'updated_at'])
    logger.info('Deactivated staff %s', staff.pk)
    return staff


def staff_for_user(user) -> Staff:
    staff = Staff.objects.select_related('hostel').filter(user=user, is_active=True).first()
    if staff is None:
        raise ValidationError({'user': 'No active staff record is linked to this account.'})
    return staff
