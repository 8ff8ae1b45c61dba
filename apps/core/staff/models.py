from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from apps.core.hostels.models import Hostel
from apps.core.utils.managers import HostelManager


class Staff(models.Model):
    EMPLOYMENT_FULL_TIME = 'full-time'
    EMPLOYMENT_PART_TIME = 'part-time'
    EMPLOYMENT_CONTRACT = 'contract'
    EMPLOYMENT_INTERN = 'intern'
    EMPLOYMENT_CHOICES = (
        (EMPLOYMENT_FULL_TIME, 'Full-time'),
        (EMPLOYMENT_PART_TIME, 'Part-time'),
        (EMPLOYMENT_CONTRACT, 'Contract'),
        (EMPLOYMENT_INTERN, 'Intern'),
    )

    hostel = models.ForeignKey(Hostel, on_delete=models.CASCADE, related_name='staff_members')
    objects = HostelManager()

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='staff_profile',
    )
    employee_id = models.CharField(max_length=50)
    staff_name = models.CharField(max_length=150)
    date_of_birth = models.DateField(null=True, blank=True)
    contact_number = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    address = models.TextField(blank=True)

    position = models.CharField(max_length=120, blank=True)
    department = models.CharField(max_length=120, blank=True)
    joining_date = models.DateField(default=timezone.localdate)
    employment_type = models.CharField(
        max_length=20,
        choices=EMPLOYMENT_CHOICES,
        default=EMPLOYMENT_FULL_TIME,
    )
    salary_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    photo = models.ImageField(upload_to='staff/photos/', null=True, blank=True)
    contract_document = models.FileField(upload_to='staff/contracts/', null=True, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['staff_name', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['hostel', 'employee_id'],
                name='unique_employee_id_per_hostel',
            ),
        ]
        indexes = [
            models.Index(fields=['hostel', 'is_active'], name='staff_hostel_active_idx'),
        ]

    def clean(self):
        super().clean()

        if self.user_id and self.user.role != 'staff':
            raise ValidationError({'user': 'Linked user must have the staff role.'})

        if self.salary_amount is not None and self.salary_amount < 0:
            raise ValidationError({'salary_amount': 'Salary cannot be negative.'})

    def __str__(self):
        return f"{self.employee_id} - {self.staff_name}"
