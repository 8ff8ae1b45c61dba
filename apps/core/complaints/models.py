from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from apps.core.staff.models import Staff
from apps.core.students.models import Student

from .senders import (
    SENDER_ADMIN,
    SENDER_STAFF,
    SENDER_STUDENT,
    SENDER_TYPE_CHOICES,
    sender_from_parts,
)

DELETED_PLACEHOLDER = 'Message deleted'
EDITED_SUFFIX = ' (edited)'


class Complain(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_RESOLVED = 'resolved'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_IN_PROGRESS, 'In Progress'),
        (STATUS_RESOLVED, 'Resolved'),
        (STATUS_REJECTED, 'Rejected'),
    )

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='complains',
    )
    staff = models.ForeignKey(
        Staff,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='complains',
    )
    title = models.CharField(max_length=200)
    description = models.TextField()
    complain_attachment = models.FileField(upload_to='complaints/', null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)

    total_messages = models.PositiveIntegerField(default=0)
    unread_admin_messages = models.PositiveIntegerField(default=0)
    unread_student_messages = models.PositiveIntegerField(default=0)
    unread_staff_messages = models.PositiveIntegerField(default=0)
    last_message_at = models.DateTimeField(null=True, blank=True)
    last_message_by = models.CharField(max_length=10, choices=SENDER_TYPE_CHOICES, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(student__isnull=False, staff__isnull=True)
                    | Q(student__isnull=True, staff__isnull=False)
                ),
                name='complain_single_owner',
            ),
        ]
        indexes = [
            models.Index(fields=['status'], name='complain_status_idx'),
        ]

    @property
    def owner_type(self):
        return SENDER_STUDENT if self.student_id else SENDER_STAFF

    @property
    def owner_name(self):
        if self.student_id:
            return self.student.student_name
        if self.staff_id:
            return self.staff.staff_name
        return ''

    def clean(self):
        super().clean()
        if bool(self.student_id) == bool(self.staff_id):
            raise ValidationError('A complaint belongs to exactly one student or staff member.')

    def __str__(self):
        return f"{self.title} ({self.status})"


class Chat(models.Model):
    TYPE_TEXT = 'text'
    TYPE_IMAGE = 'image'
    TYPE_FILE = 'file'
    MESSAGE_TYPE_CHOICES = (
        (TYPE_TEXT, 'Text'),
        (TYPE_IMAGE, 'Image'),
        (TYPE_FILE, 'File'),
    )

    complain = models.ForeignKey(Complain, on_delete=models.CASCADE, related_name='chats')
    sender_type = models.CharField(max_length=10, choices=SENDER_TYPE_CHOICES)
    sender_id = models.PositiveBigIntegerField(null=True, blank=True)
    sent_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='chat_messages',
    )

    message = models.TextField(blank=True)
    original_message = models.TextField(blank=True)
    message_type = models.CharField(max_length=10, choices=MESSAGE_TYPE_CHOICES, default=TYPE_TEXT)
    attachment = models.FileField(upload_to='chats/', null=True, blank=True)

    is_edited = models.BooleanField(default=False)
    is_deleted = models.BooleanField(default=False)
    is_read = models.BooleanField(default=False)
    edited_at = models.DateTimeField(null=True, blank=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    read_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at', 'id']
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(sender_type=SENDER_ADMIN, sender_id__isnull=True)
                    | Q(sender_type__in=[SENDER_STUDENT, SENDER_STAFF], sender_id__isnull=False)
                ),
                name='chat_sender_shape',
            ),
        ]
        indexes = [
            models.Index(fields=['complain', 'is_read'], name='chat_complain_read_idx'),
        ]

    @property
    def sender(self):
        return sender_from_parts(self.sender_type, self.sender_id)

    @property
    def display_message(self):
        if self.is_deleted:
            return DELETED_PLACEHOLDER
        if self.is_edited:
            return f'{self.message}{EDITED_SUFFIX}'
        return self.message

    def __str__(self):
        return f"{self.sender_type} on #{self.complain_id}: {self.display_message[:40]}"
