from django.core.exceptions import ValidationError
from django.db import models

from apps.core.hostels.models import Block, Hostel, Room
from apps.core.staff.models import Staff
from apps.core.utils.managers import HostelManager

SEATER_SINGLE = 1
SEATER_DOUBLE = 2
SEATER_TRIPLE = 3
SEATER_FOUR = 4
SEATER_CHOICES = (
    (SEATER_SINGLE, 'Single Seater'),
    (SEATER_DOUBLE, 'Double Seater'),
    (SEATER_TRIPLE, 'Triple Seater'),
    (SEATER_FOUR, 'Four Seater'),
)


class Inquiry(models.Model):
    """A prospective resident asking about a bed, taken at the front desk."""

    hostel = models.ForeignKey(Hostel, on_delete=models.CASCADE, related_name='inquiries')
    objects = HostelManager()

    block = models.ForeignKey(
        Block,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='inquiries',
    )
    recorded_by = models.ForeignKey(
        Staff,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='inquiries',
    )
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=20)
    seater_type = models.PositiveSmallIntegerField(choices=SEATER_CHOICES, default=SEATER_SINGLE)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name_plural = 'inquiries'
        indexes = [
            models.Index(fields=['hostel', 'created_at'], name='inquiry_hostel_created_idx'),
        ]

    def clean(self):
        super().clean()
        errors = {}
        self.name = (self.name or '').strip()
        self.phone = (self.phone or '').strip()
        if not self.name:
            errors['name'] = 'Name is required.'
        if not self.phone:
            errors['phone'] = 'Phone number is required.'
        if self.block_id and self.hostel_id and self.block.hostel_id != self.hostel_id:
            errors['block'] = 'Block belongs to a different hostel than the inquiry.'
        if self.recorded_by_id and self.hostel_id and self.recorded_by.hostel_id != self.hostel_id:
            errors['recorded_by'] = 'Staff member belongs to a different hostel.'
        if errors:
            raise ValidationError(errors)

    def __str__(self):
        return f"{self.name} ({self.phone})"


class InquirySeater(models.Model):
    """A room put forward for an inquiry, with the seating it was offered as."""

    inquiry = models.ForeignKey(Inquiry, on_delete=models.CASCADE, related_name='seaters')
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='inquiry_seaters')
    seater_type = models.PositiveSmallIntegerField(choices=SEATER_CHOICES)
    notes = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['inquiry_id', 'id']
        constraints = [
            models.UniqueConstraint(fields=['inquiry', 'room'], name='unique_room_per_inquiry'),
        ]

    @property
    def block(self):
        return self.room.block

    @property
    def seater_label(self):
        return dict(SEATER_CHOICES).get(self.seater_type, 'Unknown')

    def clean(self):
        super().clean()
        if not (self.inquiry_id and self.room_id):
            return
        if self.room.hostel_id != self.inquiry.hostel_id:
            raise ValidationError({'room': 'Room belongs to a different hostel than the inquiry.'})
        if self.inquiry.block_id and self.room.block_id != self.inquiry.block_id:
            raise ValidationError({'room': 'Room is not in the block the inquiry asked about.'})

    def __str__(self):
        return f"{self.inquiry} - {self.room}"
