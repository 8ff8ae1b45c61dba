from django.core.exceptions import ValidationError
from django.db import models

from apps.core.staff.models import Staff
from apps.core.students.models import Student


class Amenity(models.Model):
    name = models.CharField(max_length=255)
    description = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ['name', 'id']

    def clean(self):
        super().clean()
        self.name = (self.name or '').strip()
        self.description = (self.description or '').strip()
        if not self.name:
            raise ValidationError({'name': 'Amenity name is required.'})

    def __str__(self):
        return self.name


class StudentAmenity(Amenity):
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='amenities')

    class Meta(Amenity.Meta):
        verbose_name_plural = 'student amenities'
        constraints = [
            models.UniqueConstraint(fields=['student', 'name'], name='unique_amenity_per_student'),
        ]


class StaffAmenity(Amenity):
    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name='amenities')

    class Meta(Amenity.Meta):
        verbose_name_plural = 'staff amenities'
        constraints = [
            models.UniqueConstraint(fields=['staff', 'name'], name='unique_amenity_per_staff'),
        ]
