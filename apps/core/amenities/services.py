from __future__ import annotations

import logging

from django.db import transaction

from apps.core.students.models import Student

from .models import StaffAmenity, StudentAmenity

logger = logging.getLogger(__name__)


@transaction.atomic
def create_student_amenity(*, student, name: str, **fields) -> StudentAmenity:
    amenity = StudentAmenity(student=student, name=name, **fields)
    amenity.full_clean()
    amenity.save()
    logger.info('Amenity %r granted to student %s', amenity.name, student.pk)
    return amenity


@transaction.atomic
def create_staff_amenity(*, staff, name: str, **fields) -> StaffAmenity:
    amenity = StaffAmenity(staff=staff, name=name, **fields)
    amenity.full_clean()
    amenity.save()
    logger.info('Amenity %r granted to staff %s', amenity.name, staff.pk)
    return amenity


@transaction.atomic
def update_amenity(amenity, **changes):
    for field, value in changes.items():
        setattr(amenity, field, value)
    amenity.full_clean()
    amenity.save()
    return amenity


def amenities_for_occupant(occupant):
    if isinstance(occupant, Student):
        return StudentAmenity.objects.filter(student=occupant)
    return StaffAmenity.objects.filter(staff=occupant)
