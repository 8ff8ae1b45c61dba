from __future__ import annotations

import calendar
from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.utils import timezone

from apps.core.attendance.models import CheckInCheckOut
from apps.core.complaints.models import Complain
from apps.core.finance.models import Expense, Income, StudentFinancial
from apps.core.hostels.models import Room
from apps.core.students.models import Student

ZERO = Decimal('0.00')
RECENT_ACTIVITY_LIMIT = 10


def _total(queryset, field):
    return queryset.aggregate(total=Sum(field))['total'] or ZERO


def _month_bounds(day):
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def room_summary(hostel=None):
    rooms = Room.objects.for_hostel(hostel)
    total_capacity = rooms.aggregate(total=Sum('capacity'))['total'] or 0
    occupied = Student.objects.for_hostel(hostel).filter(is_active=True, room__isnull=False).count()
    return {
        'total_rooms': rooms.count(),
        'total_capacity': total_capacity,
        'occupied_beds': occupied,
        'available_beds': max(0, total_capacity - occupied),
        'under_maintenance': rooms.filter(status=Room.STATUS_MAINTENANCE).count(),
    }


def student_summary(hostel=None):
    students = Student.objects.for_hostel(hostel).filter(is_active=True)
    away = (
        CheckInCheckOut.objects.filter(
            student__in=students,
            status__in=CheckInCheckOut.FINALIZABLE_STATUSES,
        )
        .values('student_id')
        .distinct()
        .count()
    )
    total = students.count()
    return {
        'total': total,
        'in_hostel': max(0, total - away),
        'out_of_hostel': away,
    }


def finance_summary(hostel=None, today=None):
    start, end = _month_bounds(today or timezone.localdate())
    incomes = Income.objects.for_hostel(hostel)
    expenses = Expense.objects.for_hostel(hostel)

    due_financials = StudentFinancial.objects.filter(
        balance_type=StudentFinancial.BALANCE_DUE,
        initial_balance__gt=0,
    )
    if hostel is not None:
        due_financials = due_financials.filter(student__hostel=hostel)
    open_incomes = incomes.filter(due_amount__gt=0)

    return {
        'monthly_incomes': _total(incomes.filter(income_date__range=(start, end)), 'received_amount'),
        'monthly_expenses': _total(expenses.filter(expense_date__range=(start, end)), 'amount'),
        'outstanding_total': _total(open_incomes, 'due_amount') + _total(due_financials, 'initial_balance'),
        'outstanding_count': open_incomes.count() + due_financials.count(),
    }


def complaint_summary(hostel=None):
    complaints = Complain.objects.all()
    if hostel is not None:
        complaints = complaints.filter(Q(student__hostel=hostel) | Q(staff__hostel=hostel))
    counts = complaints.aggregate(
        pending=Count('id', filter=Q(status=Complain.STATUS_PENDING)),
        in_progress=Count('id', filter=Q(status=Complain.STATUS_IN_PROGRESS)),
        unread_messages=Sum('unread_admin_messages'),
    )
    counts['unread_messages'] = counts['unread_messages'] or 0
    return counts


def recent_activity(hostel=None, limit=RECENT_ACTIVITY_LIMIT):
    activity = []
    for income in Income.objects.for_hostel(hostel).order_by('-created_at')[:limit]:
        activity.append({
            'type': 'income',
            'id': income.pk,
            'date': income.created_at,
            'amount': income.amount,
            'title': income.title,
        })
    for expense in Expense.objects.for_hostel(hostel).order_by('-created_at')[:limit]:
        activity.append({
            'type': 'expense',
            'id': expense.pk,
            'date': expense.created_at,
            'amount': expense.amount,
            'title': expense.title,
        })
    events = CheckInCheckOut.objects.select_related('student', 'staff').order_by('-created_at')
    if hostel is not None:
        events = events.filter(block__hostel=hostel)
    for event in events[:limit]:
        activity.append({
            'type': 'checkincheckout',
            'id': event.pk,
            'date': event.created_at,
            'title': event.occupant_name,
            'status': event.status,
        })

    activity.sort(key=lambda item: item['date'], reverse=True)
    return activity[:limit]


def admin_dashboard_summary(hostel=None):
    return {
        'rooms': room_summary(hostel),
        'students': student_summary(hostel),
        'finance': finance_summary(hostel),
        'complaints': complaint_summary(hostel),
        'recent_activity': recent_activity(hostel),
        'calculated_at': timezone.now(),
    }
