"""Who wrote a chat message: the admin desk, a student or a staff member."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

SENDER_ADMIN = 'admin'
SENDER_STUDENT = 'student'
SENDER_STAFF = 'staff'

SENDER_TYPE_CHOICES = (
    (SENDER_ADMIN, 'Admin'),
    (SENDER_STUDENT, 'Student'),
    (SENDER_STAFF, 'Staff'),
)


@dataclass(frozen=True)
class AdminSender:
    sender_type = SENDER_ADMIN

    @property
    def sender_id(self):
        return None


@dataclass(frozen=True)
class StudentSender:
    id: int
    sender_type = SENDER_STUDENT

    @property
    def sender_id(self):
        return self.id


@dataclass(frozen=True)
class StaffSender:
    id: int
    sender_type = SENDER_STAFF

    @property
    def sender_id(self):
        return self.id


Sender = Union[AdminSender, StudentSender, StaffSender]


def sender_from_parts(sender_type: str, sender_id: int | None) -> Sender:
    if sender_type == SENDER_ADMIN:
        return AdminSender()
    if sender_type == SENDER_STUDENT:
        return StudentSender(sender_id)
    if sender_type == SENDER_STAFF:
        return StaffSender(sender_id)
    raise ValueError(f'Unknown sender type: {sender_type!r}')


def sender_for_user(user) -> Sender | None:
    """Resolve a login to the sender it writes as, or None when it has no chat identity."""
    if user.role == user.ROLE_ADMIN:
        return AdminSender()

    if user.role == user.ROLE_STUDENT:
        profile = getattr(user, 'student_profile', None)
        if profile is not None and profile.is_active:
            return StudentSender(profile.pk)
        return None

    if user.role == user.ROLE_STAFF:
        profile = getattr(user, 'staff_profile', None)
        if profile is not None and profile.is_active:
            return StaffSender(profile.pk)
    return None


def owner_sender(complain) -> Sender:
    if complain.student_id:
        return StudentSender(complain.student_id)
    return StaffSender(complain.staff_id)
