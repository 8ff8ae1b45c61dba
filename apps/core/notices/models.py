from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from apps.core.hostels.models import Block, Hostel
from apps.core.staff.models import Staff
from apps.core.students.models import Student
from apps.core.utils.managers import HostelManager


class Notice(models.Model):
    TARGET_ALL = 'all'
    TARGET_STUDENTS = 'students'
    TARGET_STAFF = 'staff'
    TARGET_STUDENT = 'specific_student'
    TARGET_STAFF_MEMBER = 'specific_staff'
    TARGET_BLOCK = 'block'
    TARGET_CHOICES = (
        (TARGET_ALL, 'Everyone'),
        (TARGET_STUDENTS, 'All Students'),
        (TARGET_STAFF, 'All Staff'),
        (TARGET_STUDENT, 'Specific Student'),
        (TARGET_STAFF_MEMBER, 'Specific Staff'),
        (TARGET_BLOCK, 'Block'),
    )

    TYPE_GENERAL = 'general'
    TYPE_URGENT = 'urgent'
    TYPE_EVENT = 'event'
    TYPE_MAINTENANCE = 'maintenance'
    TYPE_CHOICES = (
        (TYPE_GENERAL, 'General'),
        (TYPE_URGENT, 'Urgent'),
        (TYPE_EVENT, 'Event'),
        (TYPE_MAINTENANCE, 'Maintenance'),
    )

    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_CHOICES = (
        (STATUS_ACTIVE, 'Active'),
        (STATUS_INACTIVE, 'Inactive'),
    )

    hostel = models.ForeignKey(Hostel, on_delete=models.CASCADE, related_name='notices')
    objects = HostelManager()

    title = models.CharField(max_length=200)
    description = models.TextField()
    notice_attachment = models.FileField(upload_to='notices/', null=True, blank=True)
    target_type = models.CharField(max_length=20, choices=TARGET_CHOICES, default=TARGET_ALL)
    student = models.ForeignKey(Student, on_delete=models.CASCADE, null=True, blank=True, related_name='notices')
    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, null=True, blank=True, related_name='notices')
    block = models.ForeignKey(Block, on_delete=models.CASCADE, null=True, blank=True, related_name='notices')
    notice_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_GENERAL)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    schedule_time = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='notices_created',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['hostel', 'status', 'target_type'], name='notice_audience_idx'),
        ]

    def clean(self):
        super().clean()
        errors = {}

        required_target = {
            self.TARGET_STUDENT: 'student',
            self.TARGET_STAFF_MEMBER: 'staff',
            self.TARGET_BLOCK: 'block',
        }.get(self.target_type)

        for field in ('student', 'staff', 'block'):
            has_value = getattr(self, f'{field}_id') is not None
            if field == required_target and not has_value:
                errors[field] = f'Select a {field} for this notice.'
            elif field != required_target and has_value:
                errors[field] = f'{field.capitalize()} is only used when targeting a specific {field}.'

        target = getattr(self, required_target) if required_target and required_target not in errors else None
        if target is not None and self.hostel_id and target.hostel_id != self.hostel_id:
            errors[required_target] = f'{required_target.capitalize()} belongs to a different hostel.'

        if errors:
            raise ValidationError(errors)

    def __str__(self):
        return self.title
