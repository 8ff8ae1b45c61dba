from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db.models import RestrictedError
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from apps.core.finance.models import StudentFinancial
from apps.core.finance.services import student_financial_summary
from apps.core.hostels.models import Block, Hostel
from apps.core.hostels.services import create_room
from apps.core.staff.services import create_staff
from apps.core.students.services import create_student
from apps.core.utils.exceptions import STATE_ERROR_CODE

from .models import CheckInCheckOut, CheckoutFinancial, CheckoutRule
from .services import (
    approve_checkout,
    calculate_deduction,
    check_in,
    create_checkout_rule,
    decline_checkout,
    finalize_checkout,
    preview_checkout_rules,
    record_checkout,
    request_checkout,
    resolve_checkout_rule,
    toggle_checkout_rule,
)


class RuleResolutionTests(TestCase):
    def _rule(self, pk, after, percentage, is_active=True):
        return CheckoutRule(pk=pk, active_after_days=after, percentage=Decimal(percentage), is_active=is_active)

    def test_highest_reached_threshold_wins(self):
        rules = [self._rule(1, 3, '10'), self._rule(2, 7, '25')]

        match = resolve_checkout_rule(rules, 5)

        self.assertEqual(match.rule.pk, 1)
        self.assertEqual(match.percentage, Decimal('10'))
        self.assertEqual(resolve_checkout_rule(rules, 7).rule.pk, 2)
        self.assertEqual(resolve_checkout_rule(rules, 40).rule.pk, 2)

    def test_no_rule_below_lowest_threshold(self):
        rules = [self._rule(1, 3, '10'), self._rule(2, 7, '25')]
        self.assertIsNone(resolve_checkout_rule(rules, 2))
        self.assertIsNone(resolve_checkout_rule([], 10))

    def test_tie_resolves_to_lowest_pk_in_any_order(self):
        rules = [self._rule(9, 3, '30'), self._rule(4, 3, '15')]

        self.assertEqual(resolve_checkout_rule(rules, 3).rule.pk, 4)
        self.assertEqual(resolve_checkout_rule(list(reversed(rules)), 3).rule.pk, 4)

    def test_inactive_rules_are_ignored(self):
        rules = [self._rule(1, 3, '10'), self._rule(2, 7, '25', is_active=False)]
        self.assertEqual(resolve_checkout_rule(rules, 10).rule.pk, 1)


class DeductionMathTests(TestCase):
    def test_prorates_monthly_amount_by_thirty_days(self):
        base, deducted = calculate_deduction(Decimal('6000.00'), Decimal('10'), 5)
        self.assertEqual(base, Decimal('1000.00'))
        self.assertEqual(deducted, Decimal('100.00'))

    def test_rounds_half_up_to_cents(self):
        base, deducted = calculate_deduction(Decimal('0.30'), Decimal('50'), 1)
        self.assertEqual(base, Decimal('0.01'))
        self.assertEqual(deducted, Decimal('0.01'))

    def test_zero_days_deducts_nothing(self):
        self.assertEqual(calculate_deduction(Decimal('6000'), Decimal('25'), 0), (Decimal('0.00'), Decimal('0.00')))


class CheckoutBaseTestCase(TestCase):
    def setUp(self):
        user_model = get_user_model()
        self.admin = user_model.objects.create_user(username='warden', password='pass12345', role='admin')
        self.student_user = user_model.objects.create_user(username='asha', password='pass12345', role='student')

        self.hostel = Hostel.objects.create(name='Checkout Hostel')
        self.block = Block.objects.create(hostel=self.hostel, block_name='A')
        self.room = create_room(block=self.block, room_number='101', capacity=2)
        self.student = create_student(
            hostel=self.hostel,
            registration_number='S1',
            student_name='Asha',
            room=self.room,
            user=self.student_user,
        )
        StudentFinancial.objects.create(
            student=self.student,
            monthly_fee=Decimal('6000.00'),
            initial_balance=Decimal('10000.00'),
        )
        self.staff = create_staff(
            hostel=self.hostel,
            employee_id='E1',
            staff_name='Ram',
            salary_amount=Decimal('15000.00'),
        )

        self.short_rule = create_checkout_rule(student=self.student, active_after_days=3, percentage=Decimal('10'))
        self.long_rule = create_checkout_rule(student=self.student, active_after_days=7, percentage=Decimal('25'))

        self.now = timezone.now()


class FinalizeCheckoutTests(CheckoutBaseTestCase):
    def test_finalize_writes_single_ledger_entry(self):
        event, _ = record_checkout(occupant=self.student, checkout_time=self.now - timedelta(days=5, hours=2))

        event, entry = finalize_checkout(event, checkin_time=self.now)

        self.assertEqual(event.status, CheckInCheckOut.STATUS_CHECKED_IN)
        self.assertEqual(event.checkout_duration, 5)
        self.assertEqual(event.checkout_rule, self.short_rule)
        self.assertEqual(entry.checkout_rule, self.short_rule)
        self.assertEqual(entry.base_amount, Decimal('1000.00'))
        self.assertEqual(entry.percentage, Decimal('10.00'))
        self.assertEqual(entry.deducted_amount, Decimal('100.00'))
        self.assertEqual(entry.student, self.student)

    def test_second_finalize_is_rejected_without_new_entry(self):
        event, _ = record_checkout(occupant=self.student, checkout_time=self.now - timedelta(days=8))
        finalize_checkout(event, checkin_time=self.now)

        with self.assertRaises(ValidationError) as ctx:
            finalize_checkout(event, checkin_time=self.now + timedelta(days=1))

        self.assertEqual(ctx.exception.error_dict['status'][0].code, STATE_ERROR_CODE)
        self.assertEqual(CheckoutFinancial.objects.filter(checkout=event).count(), 1)

    def test_no_matching_rule_writes_no_entry(self):
        event, _ = record_checkout(occupant=self.student, checkout_time=self.now - timedelta(days=1))

        event, entry = finalize_checkout(event, checkin_time=self.now)

        self.assertEqual(event.checkout_duration, 1)
        self.assertIsNone(entry)
        self.assertFalse(CheckoutFinancial.objects.exists())

    def test_occupant_without_rules_writes_no_entry(self):
        event, entry = record_checkout(
            occupant=self.staff,
            block=self.block,
            checkout_time=self.now - timedelta(days=20),
            checkin_time=self.now,
        )

        self.assertEqual(event.status, CheckInCheckOut.STATUS_CHECKED_IN)
        self.assertIsNone(entry)

    def test_staff_deduction_uses_salary(self):
        create_checkout_rule(staff=self.staff, active_after_days=0, percentage=Decimal('50'))

        _, entry = record_checkout(
            occupant=self.staff,
            block=self.block,
            checkout_time=self.now - timedelta(days=3),
            checkin_time=self.now,
        )

        self.assertEqual(entry.base_amount, Decimal('1500.00'))
        self.assertEqual(entry.deducted_amount, Decimal('750.00'))
        self.assertEqual(entry.staff, self.staff)

    def test_checkin_before_checkout_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            record_checkout(occupant=self.student, checkout_time=self.now, checkin_time=self.now - timedelta(hours=1))
        self.assertIn('checkin_time', ctx.exception.message_dict)

    def test_deduction_reduces_remaining_balance(self):
        record_checkout(
            occupant=self.student,
            checkout_time=self.now - timedelta(days=10),
            checkin_time=self.now,
        )

        summary = student_financial_summary(self.student)

        self.assertEqual(summary['deducted_amount'], Decimal('500.00'))
        self.assertEqual(summary['remaining_balance'], Decimal('9500.00'))

    def test_ledger_entries_are_immutable(self):
        event, entry = record_checkout(
            occupant=self.student,
            checkout_time=self.now - timedelta(days=4),
            checkin_time=self.now,
        )

        entry.deducted_amount = Decimal('1.00')
        with self.assertRaises(ValidationError):
            entry.save()
        with self.assertRaises(ValidationError):
            entry.delete()
        with self.assertRaises(RestrictedError):
            event.delete()

        entry.refresh_from_db()
        self.assertEqual(entry.deducted_amount, Decimal('80.00'))


class CheckoutWorkflowTests(CheckoutBaseTestCase):
    def test_request_approve_and_check_in(self):
        event = request_checkout(occupant=self.student, requested_checkout_time=self.now - timedelta(days=3))
        self.assertEqual(event.status, CheckInCheckOut.STATUS_PENDING)
        self.assertEqual(event.block, self.block)

        event = approve_checkout(event, reviewed_by=self.admin)
        self.assertEqual(event.status, CheckInCheckOut.STATUS_APPROVED)

        event, entry = check_in(occupant=self.student, checkin_time=self.now)
        self.assertEqual(event.status, CheckInCheckOut.STATUS_CHECKED_IN)
        self.assertEqual(entry.deducted_amount, Decimal('60.00'))

    def test_duplicate_request_same_day_is_rejected(self):
        request_checkout(occupant=self.student, requested_checkout_time=self.now)

        with self.assertRaises(ValidationError) as ctx:
            request_checkout(occupant=self.student, requested_checkout_time=self.now)
        self.assertEqual(ctx.exception.code, STATE_ERROR_CODE)

    def test_declined_request_cannot_be_finalized(self):
        event = request_checkout(occupant=self.student)
        event = decline_checkout(event, reviewed_by=self.admin, remarks='Exams this week')

        self.assertEqual(event.status, CheckInCheckOut.STATUS_DECLINED)
        self.assertEqual(event.remarks, 'Exams this week')
        with self.assertRaises(ValidationError):
            finalize_checkout(event)
        with self.assertRaises(ValidationError):
            approve_checkout(event)

    def test_plain_check_in_once_per_day(self):
        event, entry = check_in(occupant=self.student, checkin_time=self.now)

        self.assertEqual(event.status, CheckInCheckOut.STATUS_CHECKED_IN)
        self.assertIsNone(entry)
        with self.assertRaises(ValidationError):
            check_in(occupant=self.student, checkin_time=self.now)

    def test_staff_needs_block(self):
        with self.assertRaises(ValidationError) as ctx:
            request_checkout(occupant=self.staff)
        self.assertIn('block', ctx.exception.message_dict)

    def test_second_recorded_checkout_while_out_is_rejected(self):
        record_checkout(occupant=self.student, checkout_time=self.now - timedelta(days=4))

        with self.assertRaises(ValidationError) as ctx:
            record_checkout(occupant=self.student, checkout_time=self.now - timedelta(days=1))
        self.assertEqual(ctx.exception.code, STATE_ERROR_CODE)

        check_in(occupant=self.student, checkin_time=self.now)
        open_events = CheckInCheckOut.objects.filter(
            student=self.student,
            status__in=CheckInCheckOut.FINALIZABLE_STATUSES,
        )
        self.assertFalse(open_events.exists())

    def test_inactive_occupant_cannot_be_recorded_out(self):
        self.staff.is_active = False
        self.staff.save(update_fields=['is_active'])

        with self.assertRaises(ValidationError) as ctx:
            record_checkout(occupant=self.staff, block=self.block, checkout_time=self.now)
        self.assertIn('occupant', ctx.exception.message_dict)

    def test_earlier_approved_checkout_blocks_new_request(self):
        earlier = request_checkout(occupant=self.student, requested_checkout_time=self.now - timedelta(days=2))
        approve_checkout(earlier, reviewed_by=self.admin)

        with self.assertRaises(ValidationError) as ctx:
            request_checkout(occupant=self.student, requested_checkout_time=self.now)
        self.assertEqual(ctx.exception.code, STATE_ERROR_CODE)


class CheckoutRuleManagementTests(CheckoutBaseTestCase):
    def test_rule_needs_exactly_one_occupant(self):
        with self.assertRaises(ValidationError):
            create_checkout_rule(active_after_days=1, percentage=Decimal('5'))
        with self.assertRaises(ValidationError):
            create_checkout_rule(student=self.student, staff=self.staff, active_after_days=1, percentage=Decimal('5'))

    def test_percentage_must_be_within_bounds(self):
        with self.assertRaises(ValidationError) as ctx:
            create_checkout_rule(student=self.student, active_after_days=1, percentage=Decimal('101'))
        self.assertIn('percentage', ctx.exception.message_dict)

    def test_toggled_off_rule_stops_applying(self):
        toggle_checkout_rule(self.short_rule)

        _, entry = record_checkout(
            occupant=self.student,
            checkout_time=self.now - timedelta(days=5),
            checkin_time=self.now,
        )

        self.assertIsNone(entry)

    def test_preview_lists_sample_durations(self):
        preview = preview_checkout_rules(self.student)

        samples = {sample['days']: sample for sample in preview['samples']}
        self.assertEqual(preview['monthly_baseline'], Decimal('6000.00'))
        self.assertIsNone(samples[1]['rule_id'])
        self.assertEqual(samples[3]['rule_id'], self.short_rule.pk)
        self.assertEqual(samples[3]['deducted_amount'], Decimal('60.00'))
        self.assertEqual(samples[15]['rule_id'], self.long_rule.pk)
        self.assertEqual(samples[15]['deducted_amount'], Decimal('750.00'))


class CheckoutApiTests(CheckoutBaseTestCase):
    def setUp(self):
        super().setUp()
        self.client = APIClient()

    def test_finalize_twice_returns_conflict(self):
        self.client.force_authenticate(self.admin)
        event, _ = record_checkout(occupant=self.student, checkout_time=self.now - timedelta(days=5))
        url = reverse('checkincheckout-finalize', args=[event.pk])

        first = self.client.post(url, {'checkin_time': self.now.isoformat()}, format='json')
        second = self.client.post(url, {'checkin_time': self.now.isoformat()}, format='json')

        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.data['ledger_entry']['deducted_amount'], '100.00')
        self.assertEqual(second.status_code, 409)
        self.assertEqual(CheckoutFinancial.objects.count(), 1)

    def test_admin_records_completed_checkout(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse('checkincheckout-list'),
            {
                'student': self.student.pk,
                'checkout_time': (self.now - timedelta(days=7)).isoformat(),
                'checkin_time': self.now.isoformat(),
            },
            format='json',
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['ledger_entry']['percentage'], '25.00')

    def test_student_requests_checkout_and_checks_in(self):
        self.client.force_authenticate(self.student_user)

        response = self.client.post(reverse('my_checkout'), {'remarks': 'Home visit'}, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['status'], CheckInCheckOut.STATUS_PENDING)

        duplicate = self.client.post(reverse('my_checkout'), {}, format='json')
        self.assertEqual(duplicate.status_code, 409)

        listing = self.client.get(reverse('my_checkincheckouts'))
        self.assertEqual(len(listing.data), 1)

    def test_student_cannot_review_requests(self):
        event = request_checkout(occupant=self.student)
        self.client.force_authenticate(self.student_user)

        response = self.client.post(reverse('checkincheckout-approve', args=[event.pk]), {}, format='json')

        self.assertEqual(response.status_code, 403)

    def test_preview_endpoint(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse('checkout-rule-preview', args=['student', self.student.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data['samples']), 5)

    def test_ledger_exports(self):
        record_checkout(
            occupant=self.student,
            checkout_time=self.now - timedelta(days=5),
            checkin_time=self.now,
        )
        self.client.force_authenticate(self.admin)

        csv_response = self.client.get(reverse('checkout-financial-export', args=['csv']))
        pdf_response = self.client.get(reverse('checkout-financial-export', args=['pdf']))

        self.assertEqual(csv_response.status_code, 200)
        self.assertIn(b'Asha', csv_response.content)
        self.assertIn(b'100.00', csv_response.content)
        self.assertEqual(pdf_response['Content-Type'], 'application/pdf')
        self.assertTrue(pdf_response.content.startswith(b'%PDF'))
