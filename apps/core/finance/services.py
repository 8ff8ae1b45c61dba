from __future__ import annotations

import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.core.hostels.services import ensure_same_hostel
from apps.core.staff.models import Staff

from .models import (
    Expense,
    Income,
    Salary,
    StaffFinancial,
    StudentFinancial,
    SupplierFinancial,
)

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


def _save(instance):
    instance.full_clean()
    instance.save()
    return instance


def _apply(instance, changes):
    for field, value in changes.items():
        setattr(instance, field, value)
    return _save(instance)


@transaction.atomic
def create_record(model, **fields):
    return _save(model(**fields))


@transaction.atomic
def update_record(instance, **changes):
    return _apply(instance, changes)


def current_student_financial(student) -> StudentFinancial | None:
    return student.financials.order_by('-created_at', '-id').first()


def current_monthly_fee(student) -> Decimal:
    financial = current_student_financial(student)
    return financial.monthly_fee if financial else ZERO


@transaction.atomic
def create_student_financial(*, student, **fields) -> StudentFinancial:
    financial = _save(StudentFinancial(student=student, **fields))
    logger.info('Student %s fee configuration set to %s/month', student.pk, financial.monthly_fee)
    return financial


@transaction.atomic
def update_student_financial(financial: StudentFinancial, **changes) -> StudentFinancial:
    return _apply(financial, changes)


def _income_status(amount, received_amount):
    if received_amount >= amount:
        return Income.STATUS_PAID
    if received_amount > 0:
        return Income.STATUS_PARTIAL
    return Income.STATUS_UNPAID


def _settle_income(income: Income) -> Income:
    received = income.received_amount or ZERO
    if income.amount is not None:
        income.due_amount = max(ZERO, income.amount - received)
        income.payment_status = _income_status(income.amount, received)
    return income


@transaction.atomic
def create_income(*, hostel, title: str, amount, **fields) -> Income:
    income = Income(hostel=hostel, title=title, amount=amount, **fields)
    _settle_income(income)
    return _save(income)


@transaction.atomic
def update_income(income: Income, **changes) -> Income:
    for field, value in changes.items():
        setattr(income, field, value)
    _settle_income(income)
    return _save(income)


@transaction.atomic
def apply_student_payment(*, student, amount, payment_type=None, remark='', income_type=None) -> Income:
    """Record money received from a student as a fully received income row."""
    amount = Decimal(amount)
    if amount <= 0:
        raise ValidationError({'amount': 'Payment amount must be greater than zero.'})

    income = create_income(
        hostel=student.hostel,
        student=student,
        title=f'Payment from {student.student_name}',
        amount=amount,
        received_amount=amount,
        payment_type=payment_type,
        income_type=income_type,
        description=remark,
    )
    logger.info('Recorded payment of %s from student %s', amount, student.pk)
    return income


@transaction.atomic
def create_expense(*, hostel, title: str, amount, student=None, staff=None, **fields) -> Expense:
    ensure_same_hostel(hostel=hostel, student=student, staff=staff)
    return _save(Expense(hostel=hostel, title=title, amount=amount, student=student, staff=staff, **fields))


@transaction.atomic
def update_expense(expense: Expense, **changes) -> Expense:
    ensure_same_hostel(
        hostel=changes.get('hostel', expense.hostel),
        student=changes.get('student', expense.student),
        staff=changes.get('staff', expense.staff),
    )
    return _apply(expense, changes)


@transaction.atomic
def create_salary(*, staff, month: int, year: int, amount=None, **fields) -> Salary:
    if Salary.objects.filter(staff=staff, month=month, year=year).exists():
        raise ValidationError({'month': f'Salary for {month:02d}/{year} already exists for this staff member.'})

    if amount is None:
        amount = staff.salary_amount
    return _save(Salary(staff=staff, month=month, year=year, amount=amount, **fields))


@transaction.atomic
def update_salary(salary: Salary, **changes) -> Salary:
    staff = changes.get('staff', salary.staff)
    month = changes.get('month', salary.month)
    year = changes.get('year', salary.year)
    duplicate = Salary.objects.filter(staff=staff, month=month, year=year).exclude(pk=salary.pk)
    if duplicate.exists():
        raise ValidationError({'month': f'Salary for {month:02d}/{year} already exists for this staff member.'})
    return _apply(salary, changes)


@transaction.atomic
def mark_salary_paid(salary: Salary, paid_on=None) -> Salary:
    if salary.status == Salary.STATUS_PAID:
        return salary
    salary.status = Salary.STATUS_PAID
    salary.paid_on = paid_on or timezone.localdate()
    salary.full_clean()
    salary.save(update_fields=['status', 'paid_on'])
    logger.info('Salary %s marked paid', salary.pk)
    return salary


@transaction.atomic
def generate_monthly_salaries(*, hostel, month: int, year: int) -> list[Salary]:
    """Create pending salary rows for every active staff member who has none for the month."""
    created = []
    existing = Salary.objects.filter(month=month, year=year).values('staff_id')
    staff_members = Staff.objects.for_hostel(hostel).active().exclude(pk__in=existing)
    for staff in staff_members:
        if not staff.salary_amount or staff.salary_amount <= 0:
            continue
        created.append(create_salary(staff=staff, month=month, year=year))
    return created


@transaction.atomic
def create_staff_financial(*, staff, amount, **fields) -> StaffFinancial:
    entry = _save(StaffFinancial(staff=staff, amount=amount, **fields))
    logger.info('Recorded payment of %s to staff %s', entry.amount, staff.pk)
    return entry


@transaction.atomic
def update_staff_financial(entry: StaffFinancial, **changes) -> StaffFinancial:
    return _apply(entry, changes)


def staff_financial_history(staff) -> dict:
    """Everything paid to a staff member: salary rows plus ad hoc payments."""
    salaries = staff.salaries.all()
    payments = staff.financials.select_related('payment_type')
    return {
        'salaries': salaries,
        'payments': payments,
        'salary_paid': _sum(salaries.filter(status=Salary.STATUS_PAID), 'amount'),
        'salary_pending': _sum(salaries.filter(status=Salary.STATUS_PENDING), 'amount'),
        'other_payments': _sum(payments, 'amount'),
    }


@transaction.atomic
def create_supplier_financial(*, supplier, amount, **fields) -> SupplierFinancial:
    return _save(SupplierFinancial(supplier=supplier, amount=amount, **fields))


@transaction.atomic
def update_supplier_financial(entry: SupplierFinancial, **changes) -> SupplierFinancial:
    return _apply(entry, changes)


def _sum(queryset, field):
    return queryset.aggregate(total=Sum(field))['total'] or ZERO


def student_financial_summary(student) -> dict:
    total_owed = _sum(
        student.financials.filter(balance_type=StudentFinancial.BALANCE_DUE),
        'initial_balance',
    )
    paid = _sum(student.incomes.all(), 'received_amount')
    deducted = _sum(student.checkout_financials.all(), 'deducted_amount')
    remaining = total_owed - paid - deducted

    return {
        'student_id': student.pk,
        'student_name': student.student_name,
        'monthly_fee': current_monthly_fee(student),
        'total_amount': total_owed,
        'deducted_amount': deducted,
        'paid_amount': paid,
        'remaining_balance': max(ZERO, remaining),
        'status': 'paid' if remaining <= 0 else 'pending',
    }
