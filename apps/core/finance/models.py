from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from apps.core.hostels.models import Hostel
from apps.core.staff.models import Staff
from apps.core.students.models import Student
from apps.core.utils.managers import HostelManager


def _ensure_positive(errors, field, value, label):
    if value is not None and value <= 0:
        errors[field] = f'{label} must be greater than zero.'


def _ensure_not_negative(errors, field, value, label):
    if value is not None and value < 0:
        errors[field] = f'{label} cannot be negative.'


class PaymentType(models.Model):
    name = models.CharField(max_length=80, unique=True)
    description = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ['name', 'id']

    def clean(self):
        super().clean()
        if self.name:
            self.name = self.name.strip()
        if not self.name:
            raise ValidationError({'name': 'Payment type name is required.'})

    def __str__(self):
        return self.name


class IncomeType(models.Model):
    hostel = models.ForeignKey(Hostel, on_delete=models.CASCADE, related_name='income_types')
    objects = HostelManager()

    title = models.CharField(max_length=120)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['title', 'id']
        constraints = [
            models.UniqueConstraint(fields=['hostel', 'title'], name='unique_income_type_per_hostel'),
        ]

    def __str__(self):
        return self.title


class ExpenseCategory(models.Model):
    hostel = models.ForeignKey(Hostel, on_delete=models.CASCADE, related_name='expense_categories')
    objects = HostelManager()

    name = models.CharField(max_length=120)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name', 'id']
        verbose_name_plural = 'expense categories'
        constraints = [
            models.UniqueConstraint(fields=['hostel', 'name'], name='unique_expense_category_per_hostel'),
        ]

    def __str__(self):
        return self.name


class StudentFinancial(models.Model):
    """Fee configuration for a student; the newest row is the one in force."""

    BALANCE_DUE = 'due'
    BALANCE_ADVANCE = 'advance'
    BALANCE_CHOICES = (
        (BALANCE_DUE, 'Due'),
        (BALANCE_ADVANCE, 'Advance'),
    )

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name='financials')
    monthly_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    admission_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    security_deposit = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    balance_type = models.CharField(max_length=10, choices=BALANCE_CHOICES, default=BALANCE_DUE)
    initial_balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    payment_date = models.DateField(default=timezone.localdate)
    payment_type = models.ForeignKey(
        PaymentType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='student_financials',
    )
    remark = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        get_latest_by = ['created_at', 'id']

    def clean(self):
        super().clean()
        errors = {}
        _ensure_not_negative(errors, 'monthly_fee', self.monthly_fee, 'Monthly fee')
        _ensure_not_negative(errors, 'admission_fee', self.admission_fee, 'Admission fee')
        _ensure_not_negative(errors, 'security_deposit', self.security_deposit, 'Security deposit')
        _ensure_not_negative(errors, 'initial_balance', self.initial_balance, 'Initial balance')
        if errors:
            raise ValidationError(errors)

    def __str__(self):
        return f"{self.student} - {self.monthly_fee}/month"


class Income(models.Model):
    STATUS_PAID = 'paid'
    STATUS_PARTIAL = 'partial'
    STATUS_UNPAID = 'unpaid'
    STATUS_CHOICES = (
        (STATUS_PAID, 'Paid'),
        (STATUS_PARTIAL, 'Partially Paid'),
        (STATUS_UNPAID, 'Unpaid'),
    )

    hostel = models.ForeignKey(Hostel, on_delete=models.CASCADE, related_name='incomes')
    objects = HostelManager()

    student = models.ForeignKey(
        Student,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='incomes',
    )
    income_type = models.ForeignKey(
        IncomeType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='incomes',
    )
    payment_type = models.ForeignKey(
        PaymentType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='incomes',
    )
    title = models.CharField(max_length=200)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    received_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    due_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    payment_status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_UNPAID)
    income_date = models.DateField(default=timezone.localdate)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-income_date', '-id']
        indexes = [
            models.Index(fields=['hostel', 'income_date'], name='income_hostel_date_idx'),
        ]

    def clean(self):
        super().clean()
        errors = {}
        _ensure_positive(errors, 'amount', self.amount, 'Amount')
        _ensure_not_negative(errors, 'received_amount', self.received_amount, 'Received amount')
        if (
            'amount' not in errors
            and self.amount is not None
            and self.received_amount is not None
            and self.received_amount > self.amount
        ):
            errors['received_amount'] = 'Received amount cannot exceed the income amount.'
        if self.student_id and self.hostel_id and self.student.hostel_id != self.hostel_id:
            errors['student'] = 'Student belongs to a different hostel.'
        if errors:
            raise ValidationError(errors)

    def __str__(self):
        return f"{self.title} - {self.amount}"


class Expense(models.Model):
    STATUS_PAID = 'paid'
    STATUS_PENDING = 'pending'
    STATUS_CHOICES = (
        (STATUS_PAID, 'Paid'),
        (STATUS_PENDING, 'Pending'),
    )

    METHOD_CASH = 'cash'
    METHOD_BANK = 'bank'
    METHOD_ONLINE = 'online'
    METHOD_CHEQUE = 'cheque'
    METHOD_CHOICES = (
        (METHOD_CASH, 'Cash'),
        (METHOD_BANK, 'Bank Transfer'),
        (METHOD_ONLINE, 'Online'),
        (METHOD_CHEQUE, 'Cheque'),
    )

    hostel = models.ForeignKey(Hostel, on_delete=models.CASCADE, related_name='expenses')
    objects = HostelManager()

    expense_category = models.ForeignKey(
        ExpenseCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses',
    )
    student = models.ForeignKey(
        Student,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses',
    )
    staff = models.ForeignKey(
        Staff,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses',
    )
    title = models.CharField(max_length=200)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    expense_date = models.DateField(default=timezone.localdate)
    payment_status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PAID)
    payment_method = models.CharField(max_length=10, choices=METHOD_CHOICES, default=METHOD_CASH)
    description = models.TextField(blank=True)
    receipt = models.FileField(upload_to='finance/expenses/', null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-expense_date', '-id']
        indexes = [
            models.Index(fields=['hostel', 'expense_date'], name='expense_hostel_date_idx'),
        ]

    def clean(self):
        super().clean()
        errors = {}
        _ensure_positive(errors, 'amount', self.amount, 'Amount')
        if self.expense_category_id and self.hostel_id and self.expense_category.hostel_id != self.hostel_id:
            errors['expense_category'] = 'Expense category belongs to a different hostel.'
        if errors:
            raise ValidationError(errors)

    def __str__(self):
        return f"{self.title} - {self.amount}"


class Salary(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_PAID = 'paid'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
    )

    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name='salaries')
    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    paid_on = models.DateField(null=True, blank=True)
    remarks = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-year', '-month', 'staff__staff_name']
        verbose_name_plural = 'salaries'
        constraints = [
            models.UniqueConstraint(
                fields=['staff', 'month', 'year'],
                name='unique_salary_per_staff_month',
            ),
        ]

    def clean(self):
        super().clean()
        errors = {}
        if self.month is not None and not 1 <= self.month <= 12:
            errors['month'] = 'Month must be between 1 and 12.'
        if self.year is not None and self.year < 2000:
            errors['year'] = 'Year looks invalid.'
        _ensure_positive(errors, 'amount', self.amount, 'Salary amount')
        if self.status == self.STATUS_PAID and not self.paid_on:
            self.paid_on = timezone.localdate()
        if errors:
            raise ValidationError(errors)

    def __str__(self):
        return f"{self.staff} - {self.month:02d}/{self.year}"


class StaffFinancial(models.Model):
    """Ad hoc payment to a staff member outside the monthly salary run (advance, bonus, allowance)."""

    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name='financials')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_date = models.DateField(default=timezone.localdate)
    payment_type = models.ForeignKey(
        PaymentType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='staff_financials',
    )
    remark = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-payment_date', '-id']

    def clean(self):
        super().clean()
        errors = {}
        _ensure_positive(errors, 'amount', self.amount, 'Amount')
        if errors:
            raise ValidationError(errors)

    def __str__(self):
        return f"{self.staff} - {self.amount}"


class Supplier(models.Model):
    hostel = models.ForeignKey(Hostel, on_delete=models.CASCADE, related_name='suppliers')
    objects = HostelManager()

    name = models.CharField(max_length=200)
    contact_number = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    address = models.TextField(blank=True)
    pan_number = models.CharField(max_length=30, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name', 'id']

    def __str__(self):
        return self.name


class SupplierFinancial(models.Model):
    supplier = models.ForeignKey(Supplier, on_delete=models.CASCADE, related_name='financials')
    payment_type = models.ForeignKey(
        PaymentType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='supplier_financials',
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    payment_date = models.DateField(default=timezone.localdate)
    remark = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-payment_date', '-id']

    @property
    def due_amount(self):
        return max(Decimal('0.00'), self.amount - self.paid_amount)

    def clean(self):
        super().clean()
        errors = {}
        _ensure_positive(errors, 'amount', self.amount, 'Amount')
        _ensure_not_negative(errors, 'paid_amount', self.paid_amount, 'Paid amount')
        if errors:
            raise ValidationError(errors)

    def __str__(self):
        return f"{self.supplier} - {self.amount}"
