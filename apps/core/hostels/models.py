from django.core.exceptions import ValidationError
from django.db import models

from apps.core.utils.managers import HostelManager


class Hostel(models.Model):
    name = models.CharField(max_length=255)
    address = models.TextField(blank=True)
    contact_number = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name', 'id']
        indexes = [
            models.Index(fields=['is_active'], name='hostel_active_idx'),
        ]

    def __str__(self):
        return self.name


class Block(models.Model):
    hostel = models.ForeignKey(
        Hostel,
        on_delete=models.CASCADE,
        related_name='blocks',
    )
    objects = HostelManager()

    block_name = models.CharField(max_length=120)
    location = models.CharField(max_length=255, blank=True)
    manager_name = models.CharField(max_length=120, blank=True)
    manager_contact = models.CharField(max_length=20, blank=True)
    remarks = models.TextField(blank=True)
    block_attachment = models.ImageField(upload_to='hostels/blocks/', null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['block_name', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['hostel', 'block_name'],
                name='unique_block_name_per_hostel',
            ),
        ]

    def __str__(self):
        return self.block_name


class Room(models.Model):
    STATUS_AVAILABLE = 'available'
    STATUS_OCCUPIED = 'occupied'
    STATUS_MAINTENANCE = 'maintenance'
    STATUS_CHOICES = (
        (STATUS_AVAILABLE, 'Available'),
        (STATUS_OCCUPIED, 'Occupied'),
        (STATUS_MAINTENANCE, 'Under Maintenance'),
    )

    TYPE_SINGLE = 'single'
    TYPE_DOUBLE = 'double'
    TYPE_TRIPLE = 'triple'
    TYPE_DORMITORY = 'dormitory'
    TYPE_CHOICES = (
        (TYPE_SINGLE, 'Single'),
        (TYPE_DOUBLE, 'Double'),
        (TYPE_TRIPLE, 'Triple'),
        (TYPE_DORMITORY, 'Dormitory'),
    )

    hostel = models.ForeignKey(
        Hostel,
        on_delete=models.CASCADE,
        related_name='rooms',
    )
    block = models.ForeignKey(
        Block,
        on_delete=models.RESTRICT,
        related_name='rooms',
    )
    objects = HostelManager()

    room_number = models.CharField(max_length=30)
    capacity = models.PositiveIntegerField(default=1)
    room_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_DOUBLE)
    floor_number = models.IntegerField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_AVAILABLE)
    room_attachment = models.ImageField(upload_to='hostels/rooms/', null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['block__block_name', 'room_number', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['block', 'room_number'],
                name='unique_room_number_per_block',
            ),
        ]
        indexes = [
            models.Index(fields=['hostel', 'status'], name='room_hostel_status_idx'),
        ]

    def clean(self):
        super().clean()

        if self.capacity is not None and self.capacity < 1:
            raise ValidationError({'capacity': 'Room capacity must be at least 1.'})

    @property
    def occupant_count(self):
        return self.students.filter(is_active=True).count()

    @property
    def available_beds(self):
        return max(0, self.capacity - self.occupant_count)

    def __str__(self):
        return f"{self.block} / {self.room_number}"
