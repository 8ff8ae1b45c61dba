from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.core.finance.services import current_monthly_fee
from apps.core.staff.models import Staff
from apps.core.students.models import Student
from apps.core.utils.exceptions import state_error

from .models import CheckInCheckOut, CheckoutFinancial, CheckoutRule

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
PREVIEW_DURATIONS = (1, 3, 7, 15, 30)


def _days_per_month() -> int:
    return int(getattr(settings, 'CHECKOUT_DAYS_PER_MONTH', 30))


def _occupant_kwargs(occupant) -> dict:
    if isinstance(occupant, Student):
        return {'student': occupant}
    if isinstance(occupant, Staff):
        return {'staff': occupant}
    raise TypeError(f'Unsupported occupant type: {type(occupant).__name__}')


def occupant_for_user(user):
    """The active student or staff record linked to a login, if any."""
    student = Student.objects.filter(user=user, is_active=True).select_related('room__block').first()
    if student is not None:
        return student
    staff = Staff.objects.filter(user=user, is_active=True).first()
    if staff is not None:
        return staff
    raise ValidationError({'user': 'No active student or staff record is linked to this account.'})


# Rule resolution


@dataclass(frozen=True)
class RuleMatch:
    rule: CheckoutRule
    percentage: Decimal


def resolve_checkout_rule(rules: Iterable[CheckoutRule], elapsed_days: int) -> RuleMatch | None:
    """Pick the active rule with the highest threshold the stay has reached.

    Rules sharing a threshold resolve to the lowest primary key, so the result
    does not depend on the order the rules are supplied in.
    """
    best = None
    for rule in rules:
        if not rule.is_active or rule.active_after_days > elapsed_days:
            continue
        if best is None:
            best = rule
            continue
        if rule.active_after_days > best.active_after_days:
            best = rule
        elif rule.active_after_days == best.active_after_days and (rule.pk or 0) < (best.pk or 0):
            best = rule

    if best is None:
        return None
    return RuleMatch(rule=best, percentage=Decimal(best.percentage))


def monthly_baseline(occupant) -> Decimal:
    if isinstance(occupant, Student):
        return current_monthly_fee(occupant)
    return occupant.salary_amount or Decimal('0.00')


def calculate_deduction(monthly_amount, percentage, duration_days):
    """Return ``(base_amount, deducted_amount)`` rounded half-up to cents."""
    base = Decimal(monthly_amount) / _days_per_month() * duration_days
    deducted = base * Decimal(percentage) / 100
    return (
        base.quantize(CENT, rounding=ROUND_HALF_UP),
        deducted.quantize(CENT, rounding=ROUND_HALF_UP),
    )


def active_rules_for(occupant):
    return CheckoutRule.objects.for_occupant(occupant).filter(is_active=True)


@transaction.atomic
def record_deduction(event: CheckInCheckOut) -> CheckoutFinancial | None:
    """Write the ledger entry for a finalized checkout; returns the existing one if already written."""
    existing = CheckoutFinancial.objects.filter(checkout=event).first()
    if existing is not None:
        return existing

    duration = event.checkout_duration or 0
    match = resolve_checkout_rule(active_rules_for(event.occupant), duration)
    if match is None:
        logger.info('No checkout rule applies to event %s after %s day(s)', event.pk, duration)
        return None

    base_amount, deducted_amount = calculate_deduction(
        monthly_baseline(event.occupant),
        match.percentage,
        duration,
    )
    entry = CheckoutFinancial(
        **_occupant_kwargs(event.occupant),
        checkout=event,
        checkout_rule=match.rule,
        checkout_duration=duration,
        base_amount=base_amount,
        percentage=match.percentage,
        deducted_amount=deducted_amount,
    )
    entry.full_clean(exclude=['checkout'])
    try:
        with transaction.atomic():
            entry.save()
    except IntegrityError:
        return CheckoutFinancial.objects.get(checkout=event)

    if event.checkout_rule_id != match.rule.pk:
        event.checkout_rule = match.rule
        event.save(update_fields=['checkout_rule', 'updated_at'])

    logger.info(
        'Deducted %s (%s%% of %s) for event %s',
        deducted_amount,
        match.percentage,
        base_amount,
        event.pk,
    )
    return entry


# Check-in / check-out workflow


def _resolve_block(occupant, block):
    if block is not None:
        return block
    if isinstance(occupant, Student) and occupant.room_id:
        return occupant.room.block
    raise ValidationError({'block': 'Block is required for this checkout.'})


def _ensure_active(occupant):
    if not occupant.is_active:
        raise ValidationError({'occupant': 'Inactive occupants cannot check in or out.'})


def _lock(event: CheckInCheckOut) -> CheckInCheckOut:
    return CheckInCheckOut.objects.select_for_update().get(pk=event.pk)


def open_checkout_for(occupant) -> CheckInCheckOut | None:
    return (
        CheckInCheckOut.objects.for_occupant(occupant)
        .filter(status__in=CheckInCheckOut.FINALIZABLE_STATUSES)
        .order_by('-date', '-id')
        .first()
    )


def _ensure_no_open_checkout(occupant, day) -> None:
    """One checkout at a time: no pending request for the day and no unreturned checkout on any day."""
    events = CheckInCheckOut.objects.for_occupant(occupant)
    if events.filter(date=day, status=CheckInCheckOut.STATUS_PENDING).exists():
        raise state_error('A checkout request for this day is already pending.')
    if events.filter(status__in=CheckInCheckOut.FINALIZABLE_STATUSES).exists():
        raise state_error('Occupant already has an open checkout that has not been checked in.')


@transaction.atomic
def request_checkout(
    *,
    occupant,
    block=None,
    requested_checkout_time: datetime | None = None,
    estimated_checkin_date=None,
    remarks='',
) -> CheckInCheckOut:
    _ensure_active(occupant)
    block = _resolve_block(occupant, block)
    checkout_time = requested_checkout_time or timezone.now()
    event_date = timezone.localdate(checkout_time)

    _ensure_no_open_checkout(occupant, event_date)

    event = CheckInCheckOut(
        **_occupant_kwargs(occupant),
        block=block,
        date=event_date,
        requested_checkout_time=checkout_time,
        checkout_time=checkout_time,
        estimated_checkin_date=estimated_checkin_date,
        status=CheckInCheckOut.STATUS_PENDING,
        remarks=remarks,
    )
    event.full_clean()
    event.save()
    logger.info('Checkout requested by %s %s (event %s)', event.occupant_type, occupant.pk, event.pk)
    return event


@transaction.atomic
def approve_checkout(event: CheckInCheckOut, *, reviewed_by=None, remarks=None) -> CheckInCheckOut:
    event = _lock(event)
    if event.status != CheckInCheckOut.STATUS_PENDING:
        raise state_error(f'Only pending requests can be approved (current status: {event.status}).', 'status')

    event.status = CheckInCheckOut.STATUS_APPROVED
    if event.checkout_time is None:
        event.checkout_time = event.requested_checkout_time or timezone.now()
    event.reviewed_by = reviewed_by
    if remarks is not None:
        event.remarks = remarks
    event.full_clean()
    event.save()
    return event


@transaction.atomic
def decline_checkout(event: CheckInCheckOut, *, reviewed_by=None, remarks=None) -> CheckInCheckOut:
    event = _lock(event)
    if event.status != CheckInCheckOut.STATUS_PENDING:
        raise state_error(f'Only pending requests can be declined (current status: {event.status}).', 'status')

    event.status = CheckInCheckOut.STATUS_DECLINED
    event.reviewed_by = reviewed_by
    if remarks is not None:
        event.remarks = remarks
    event.full_clean()
    event.save()
    return event


@transaction.atomic
def finalize_checkout(event: CheckInCheckOut, *, checkin_time: datetime | None = None):
    """Close a checkout when the occupant returns.

    Sets the whole-day duration, applies the matching rule and writes at most
    one ledger entry. Returns ``(event, ledger_entry_or_None)``.
    """
    event = _lock(event)
    if event.status == CheckInCheckOut.STATUS_CHECKED_IN:
        raise state_error('This checkout has already been finalized.', 'status')
    if event.status not in CheckInCheckOut.FINALIZABLE_STATUSES:
        raise state_error(f'Checkout in status {event.status} cannot be finalized.', 'status')
    if event.checkout_time is None:
        raise ValidationError({'checkout_time': 'Checkout time is missing.'})

    event.checkin_time = checkin_time or timezone.now()
    event.checkout_duration = max(0, (event.checkin_time - event.checkout_time).days)
    event.status = CheckInCheckOut.STATUS_CHECKED_IN
    event.full_clean()
    event.save()

    ledger_entry = record_deduction(event)
    return event, ledger_entry


@transaction.atomic
def check_in(*, occupant, block=None, checkin_time: datetime | None = None):
    """Occupant returns: finalize the open checkout, or log a plain check-in for today."""
    _ensure_active(occupant)
    open_event = open_checkout_for(occupant)
    if open_event is not None:
        return finalize_checkout(open_event, checkin_time=checkin_time)

    checkin_time = checkin_time or timezone.now()
    today = timezone.localdate(checkin_time)
    already_in = CheckInCheckOut.objects.for_occupant(occupant).filter(
        date=today,
        status=CheckInCheckOut.STATUS_CHECKED_IN,
    )
    if already_in.exists():
        raise state_error('Already checked in today.')

    event = CheckInCheckOut(
        **_occupant_kwargs(occupant),
        block=_resolve_block(occupant, block),
        date=today,
        checkin_time=checkin_time,
        status=CheckInCheckOut.STATUS_CHECKED_IN,
    )
    event.full_clean()
    event.save()
    return event, None


@transaction.atomic
def record_checkout(
    *,
    occupant,
    checkout_time: datetime,
    block=None,
    checkin_time: datetime | None = None,
    estimated_checkin_date=None,
    remarks='',
    recorded_by=None,
):
    """Admin entry of a checkout; with a check-in time it is finalized straight away."""
    if checkin_time is not None and checkin_time < checkout_time:
        raise ValidationError({'checkin_time': 'Check-in time cannot be before checkout time.'})
    _ensure_active(occupant)
    _ensure_no_open_checkout(occupant, timezone.localdate(checkout_time))

    event = CheckInCheckOut(
        **_occupant_kwargs(occupant),
        block=_resolve_block(occupant, block),
        date=timezone.localdate(checkout_time),
        checkout_time=checkout_time,
        estimated_checkin_date=estimated_checkin_date,
        status=CheckInCheckOut.STATUS_CHECKED_OUT,
        remarks=remarks,
        reviewed_by=recorded_by,
    )
    event.full_clean()
    event.save()

    if checkin_time is None:
        return event, None
    return finalize_checkout(event, checkin_time=checkin_time)


def events_for_day(day=None, hostel=None):
    day = day or timezone.localdate()
    queryset = CheckInCheckOut.objects.filter(date=day).select_related('student', 'staff', 'block')
    if hostel is not None:
        queryset = queryset.filter(block__hostel=hostel)
    return queryset


# Rule management


@transaction.atomic
def create_checkout_rule(*, active_after_days: int, percentage, student=None, staff=None, is_active=True) -> CheckoutRule:
    rule = CheckoutRule(
        student=student,
        staff=staff,
        active_after_days=active_after_days,
        percentage=percentage,
        is_active=is_active,
    )
    rule.full_clean()
    rule.save()
    return rule


@transaction.atomic
def update_checkout_rule(rule: CheckoutRule, **changes) -> CheckoutRule:
    for field, value in changes.items():
        setattr(rule, field, value)
    rule.full_clean()
    rule.save()
    return rule


@transaction.atomic
def toggle_checkout_rule(rule: CheckoutRule) -> CheckoutRule:
    rule.is_active = not rule.is_active
    rule.save(update_fields=['is_active', 'updated_at'])
    logger.info('Checkout rule %s is now %s', rule.pk, 'active' if rule.is_active else 'inactive')
    return rule


def preview_checkout_rules(occupant, durations=PREVIEW_DURATIONS) -> dict:
    """Show what each sample stay length would cost the occupant under their active rules."""
    rules = list(active_rules_for(occupant))
    baseline = monthly_baseline(occupant)

    samples = []
    for days in durations:
        match = resolve_checkout_rule(rules, days)
        if match is None:
            samples.append({
                'days': days,
                'rule_id': None,
                'percentage': None,
                'base_amount': None,
                'deducted_amount': Decimal('0.00'),
            })
            continue

        base_amount, deducted_amount = calculate_deduction(baseline, match.percentage, days)
        samples.append({
            'days': days,
            'rule_id': match.rule.pk,
            'percentage': match.percentage,
            'base_amount': base_amount,
            'deducted_amount': deducted_amount,
        })

    return {
        'occupant_type': 'student' if isinstance(occupant, Student) else 'staff',
        'occupant_id': occupant.pk,
        'monthly_baseline': baseline,
        'rules': [
            {'id': rule.pk, 'active_after_days': rule.active_after_days, 'percentage': rule.percentage}
            for rule in rules
        ],
        'samples': samples,
    }
