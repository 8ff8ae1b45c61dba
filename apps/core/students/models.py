from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from apps.core.hostels.models import Hostel, Room
from apps.core.utils.managers import HostelManager


class Student(models.Model):
    BLOOD_GROUP_CHOICES = (
        ('A+', 'A+'),
        ('A-', 'A-'),
        ('B+', 'B+'),
        ('B-', 'B-'),
        ('AB+', 'AB+'),
        ('AB-', 'AB-'),
        ('O+', 'O+'),
        ('O-', 'O-'),
    )
    FOOD_CHOICES = (
        ('veg', 'Vegetarian'),
        ('non-veg', 'Non-vegetarian'),
        ('egg', 'Eggetarian'),
    )

    hostel = models.ForeignKey(Hostel, on_delete=models.CASCADE, related_name='students')
    objects = HostelManager()

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='student_profile',
    )
    room = models.ForeignKey(
        Room,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='students',
    )

    registration_number = models.CharField(max_length=50)
    student_name = models.CharField(max_length=150)
    date_of_birth = models.DateField(null=True, blank=True)
    contact_number = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    address = models.TextField(blank=True)

    educational_institution = models.CharField(max_length=255, blank=True)
    level_of_study = models.CharField(max_length=120, blank=True)
    blood_group = models.CharField(max_length=5, choices=BLOOD_GROUP_CHOICES, blank=True)
    food = models.CharField(max_length=10, choices=FOOD_CHOICES, blank=True)
    disease = models.CharField(max_length=255, blank=True)

    guardian_name = models.CharField(max_length=150, blank=True)
    guardian_contact = models.CharField(max_length=20, blank=True)
    guardian_relation = models.CharField(max_length=50, blank=True)

    photo = models.ImageField(upload_to='students/photos/', null=True, blank=True)
    joining_date = models.DateField(default=timezone.localdate)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['student_name', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['hostel', 'registration_number'],
                name='unique_student_registration_per_hostel',
            ),
        ]
        indexes = [
            models.Index(fields=['hostel', 'is_active'], name='student_hostel_active_idx'),
            models.Index(fields=['room', 'is_active'], name='student_room_active_idx'),
        ]

    def clean(self):
        super().clean()

        if self.user_id and self.user.role != 'student':
            raise ValidationError({'user': 'Linked user must have the student role.'})

        if self.date_of_birth and self.date_of_birth > timezone.localdate():
            raise ValidationError({'date_of_birth': 'Date of birth cannot be in the future.'})

        if self.room_id and self.hostel_id and self.room.hostel_id != self.hostel_id:
            raise ValidationError({'room': 'Room belongs to a different hostel than the student.'})

    @property
    def block(self):
        return self.room.block if self.room_id else None

    def __str__(self):
        return f"{self.registration_number} - {self.student_name}"
