from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from apps.core.hostels.models import Block
from apps.core.staff.models import Staff
from apps.core.students.models import Student


EXACTLY_ONE_OCCUPANT = (
    Q(student__isnull=False, staff__isnull=True)
    | Q(student__isnull=True, staff__isnull=False)
)


class OccupantQuerySet(models.QuerySet):
    def for_occupant(self, occupant):
        if isinstance(occupant, Student):
            return self.filter(student=occupant)
        if isinstance(occupant, Staff):
            return self.filter(staff=occupant)
        raise TypeError(f'Unsupported occupant type: {type(occupant).__name__}')


class OccupantModel(models.Model):
    """Rows that belong to exactly one student or one staff member."""

    objects = OccupantQuerySet.as_manager()

    class Meta:
        abstract = True

    @property
    def occupant(self):
        return self.student if self.student_id else self.staff

    @property
    def occupant_type(self):
        if self.student_id:
            return 'student'
        if self.staff_id:
            return 'staff'
        return ''

    @property
    def occupant_name(self):
        if self.student_id:
            return self.student.student_name
        if self.staff_id:
            return self.staff.staff_name
        return ''

    def clean(self):
        super().clean()
        if bool(self.student_id) == bool(self.staff_id):
            raise ValidationError('Exactly one of student or staff must be set.')


class CheckoutRule(OccupantModel):
    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='checkout_rules',
    )
    staff = models.ForeignKey(
        Staff,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='checkout_rules',
    )
    is_active = models.BooleanField(default=True)
    active_after_days = models.PositiveIntegerField(default=0)
    percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['active_after_days', 'id']
        constraints = [
            models.CheckConstraint(condition=EXACTLY_ONE_OCCUPANT, name='checkout_rule_single_occupant'),
        ]

    def __str__(self):
        return f"{self.occupant_name}: {self.percentage}% after {self.active_after_days} day(s)"


class CheckInCheckOut(OccupantModel):
    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_DECLINED = 'declined'
    STATUS_CHECKED_IN = 'checked_in'
    STATUS_CHECKED_OUT = 'checked_out'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_DECLINED, 'Declined'),
        (STATUS_CHECKED_IN, 'Checked In'),
        (STATUS_CHECKED_OUT, 'Checked Out'),
    )
    FINALIZABLE_STATUSES = (STATUS_APPROVED, STATUS_CHECKED_OUT)

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='checkincheckouts',
    )
    staff = models.ForeignKey(
        Staff,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='checkincheckouts',
    )
    block = models.ForeignKey(Block, on_delete=models.RESTRICT, related_name='checkincheckouts')
    checkout_rule = models.ForeignKey(
        CheckoutRule,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='checkincheckouts',
    )
    date = models.DateField(default=timezone.localdate)
    requested_checkout_time = models.DateTimeField(null=True, blank=True)
    requested_checkin_time = models.DateTimeField(null=True, blank=True)
    checkout_time = models.DateTimeField(null=True, blank=True)
    checkin_time = models.DateTimeField(null=True, blank=True)
    estimated_checkin_date = models.DateField(null=True, blank=True)
    checkout_duration = models.PositiveIntegerField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    remarks = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_checkincheckouts',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-date', '-id']
        constraints = [
            models.CheckConstraint(condition=EXACTLY_ONE_OCCUPANT, name='checkincheckout_single_occupant'),
        ]
        indexes = [
            models.Index(fields=['date', 'status'], name='checkio_date_status_idx'),
        ]

    def clean(self):
        super().clean()
        errors = {}

        occupant = self.occupant
        if occupant is not None and self.block_id and self.block.hostel_id != occupant.hostel_id:
            errors['block'] = 'Block belongs to a different hostel than the occupant.'

        if self.checkout_time and self.checkin_time and self.checkin_time < self.checkout_time:
            errors['checkin_time'] = 'Check-in time cannot be before checkout time.'

        if (
            self.estimated_checkin_date
            and self.date
            and self.estimated_checkin_date < self.date
        ):
            errors['estimated_checkin_date'] = 'Estimated return cannot be before the checkout date.'

        if errors:
            raise ValidationError(errors)

    @property
    def is_finalized(self):
        return self.status == self.STATUS_CHECKED_IN and self.checkout_time is not None and self.checkin_time is not None

    def __str__(self):
        return f"{self.occupant_name} {self.date} ({self.status})"


class CheckoutFinancial(OccupantModel):
    """Deduction ledger entry. Written once when a checkout is finalized."""

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='checkout_financials',
    )
    staff = models.ForeignKey(
        Staff,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='checkout_financials',
    )
    checkout = models.OneToOneField(
        CheckInCheckOut,
        on_delete=models.RESTRICT,
        related_name='ledger_entry',
    )
    checkout_rule = models.ForeignKey(
        CheckoutRule,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='ledger_entries',
    )
    checkout_duration = models.PositiveIntegerField()
    base_amount = models.DecimalField(max_digits=12, decimal_places=2)
    percentage = models.DecimalField(max_digits=5, decimal_places=2)
    deducted_amount = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        constraints = [
            models.CheckConstraint(condition=EXACTLY_ONE_OCCUPANT, name='checkout_financial_single_occupant'),
        ]

    def save(self, *args, **kwargs):
        if self.pk and CheckoutFinancial.objects.filter(pk=self.pk).exists():
            raise ValidationError('Deduction ledger entries cannot be modified.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError('Deduction ledger entries cannot be deleted.')

    def __str__(self):
        return f"{self.occupant_name}: {self.deducted_amount} for {self.checkout_duration} day(s)"
