from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from apps.core.hostels.models import Hostel
from apps.core.staff.services import create_staff
from apps.core.students.services import create_student

from .models import Income, PaymentType, Salary, StudentFinancial
from .services import (
    apply_student_payment,
    create_expense,
    create_income,
    create_salary,
    create_staff_financial,
    create_student_financial,
    current_monthly_fee,
    generate_monthly_salaries,
    mark_salary_paid,
    staff_financial_history,
    student_financial_summary,
)


class FinanceServiceTests(TestCase):
    def setUp(self):
        self.hostel = Hostel.objects.create(name='Finance Hostel')
        self.other_hostel = Hostel.objects.create(name='Other Hostel')
        self.student = create_student(hostel=self.hostel, registration_number='S1', student_name='Sabin')
        self.staff = create_staff(
            hostel=self.hostel,
            employee_id='E1',
            staff_name='Sunita',
            salary_amount=Decimal('20000.00'),
        )

    def test_expense_amount_must_be_positive(self):
        with self.assertRaises(ValidationError) as ctx:
            create_expense(hostel=self.hostel, title='Bulbs', amount=Decimal('0'))
        self.assertIn('amount', ctx.exception.message_dict)

    def test_expense_occupants_must_share_hostel(self):
        with self.assertRaises(ValidationError) as ctx:
            create_expense(
                hostel=self.other_hostel,
                title='Repair',
                amount=Decimal('500'),
                student=self.student,
                staff=self.staff,
            )
        self.assertEqual(set(ctx.exception.message_dict), {'student', 'staff'})

    def test_income_status_tracks_received_amount(self):
        income = create_income(
            hostel=self.hostel,
            student=self.student,
            title='Hostel fee',
            amount=Decimal('6000'),
            received_amount=Decimal('2500'),
        )
        self.assertEqual(income.due_amount, Decimal('3500'))
        self.assertEqual(income.payment_status, Income.STATUS_PARTIAL)

    def test_received_amount_cannot_exceed_amount(self):
        with self.assertRaises(ValidationError) as ctx:
            create_income(hostel=self.hostel, title='Fee', amount=Decimal('100'), received_amount=Decimal('150'))
        self.assertIn('received_amount', ctx.exception.message_dict)

    def test_current_monthly_fee_uses_latest_configuration(self):
        self.assertEqual(current_monthly_fee(self.student), Decimal('0.00'))

        create_student_financial(student=self.student, monthly_fee=Decimal('5000.00'))
        create_student_financial(student=self.student, monthly_fee=Decimal('6000.00'))

        self.assertEqual(current_monthly_fee(self.student), Decimal('6000.00'))

    def test_salary_is_unique_per_month(self):
        create_salary(staff=self.staff, month=4, year=2026)

        with self.assertRaises(ValidationError) as ctx:
            create_salary(staff=self.staff, month=4, year=2026)
        self.assertIn('month', ctx.exception.message_dict)

    def test_salary_defaults_to_staff_salary_and_can_be_paid(self):
        salary = create_salary(staff=self.staff, month=5, year=2026)
        self.assertEqual(salary.amount, Decimal('20000.00'))

        salary = mark_salary_paid(salary)
        self.assertEqual(salary.status, Salary.STATUS_PAID)
        self.assertIsNotNone(salary.paid_on)

    def test_generate_monthly_salaries_skips_existing(self):
        create_salary(staff=self.staff, month=6, year=2026)
        second = create_staff(hostel=self.hostel, employee_id='E2', staff_name='Rita', salary_amount=Decimal('15000'))

        created = generate_monthly_salaries(hostel=self.hostel, month=6, year=2026)

        self.assertEqual([salary.staff for salary in created], [second])

    def test_staff_payment_amount_must_be_positive(self):
        with self.assertRaises(ValidationError) as ctx:
            create_staff_financial(staff=self.staff, amount=Decimal('0.00'))
        self.assertIn('amount', ctx.exception.message_dict)

    def test_staff_history_totals_salaries_and_payments(self):
        mark_salary_paid(create_salary(staff=self.staff, month=1, year=2026))
        create_salary(staff=self.staff, month=2, year=2026)
        create_staff_financial(staff=self.staff, amount=Decimal('2500.00'), remark='Festival advance')

        history = staff_financial_history(self.staff)

        self.assertEqual(history['salary_paid'], Decimal('20000.00'))
        self.assertEqual(history['salary_pending'], Decimal('20000.00'))
        self.assertEqual(history['other_payments'], Decimal('2500.00'))
        self.assertEqual(history['payments'].count(), 1)

    def test_summary_subtracts_payments(self):
        StudentFinancial.objects.create(
            student=self.student,
            monthly_fee=Decimal('6000.00'),
            initial_balance=Decimal('10000.00'),
        )
        apply_student_payment(student=self.student, amount=Decimal('4000.00'))

        summary = student_financial_summary(self.student)

        self.assertEqual(summary['paid_amount'], Decimal('4000.00'))
        self.assertEqual(summary['remaining_balance'], Decimal('6000.00'))
        self.assertEqual(summary['status'], 'pending')

        apply_student_payment(student=self.student, amount=Decimal('6000.00'))
        summary = student_financial_summary(self.student)
        self.assertEqual(summary['remaining_balance'], Decimal('0.00'))
        self.assertEqual(summary['status'], 'paid')


class FinanceApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = get_user_model().objects.create_user(username='admin', password='pass12345', role='admin')
        self.client.force_authenticate(self.admin)
        self.hostel = Hostel.objects.create(name='Finance API Hostel')

    def test_expense_with_zero_amount_returns_400(self):
        response = self.client.post(
            reverse('expense-list'),
            {'hostel': self.hostel.pk, 'title': 'Nothing', 'amount': '0.00'},
            format='json',
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('amount', response.data)

    def test_student_payment_endpoint_returns_summary(self):
        student = create_student(hostel=self.hostel, registration_number='S9', student_name='Nima')
        StudentFinancial.objects.create(student=student, initial_balance=Decimal('3000.00'))

        response = self.client.post(
            reverse('income-student-payment', args=[student.pk]),
            {'amount': '1000.00', 'remark': 'Cash at desk'},
            format='json',
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['summary']['remaining_balance'], Decimal('2000.00'))

    def test_staff_financial_crud_and_lookup_by_staff(self):
        staff = create_staff(hostel=self.hostel, employee_id='E7', staff_name='Kamal', salary_amount=Decimal('18000'))
        cash = PaymentType.objects.create(name='Cash')

        response = self.client.post(
            reverse('staff-financial-list'),
            {'staff': staff.pk, 'amount': '1500.00', 'payment_type': cash.pk, 'remark': 'Uniform allowance'},
            format='json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['payment_type_name'], 'Cash')

        response = self.client.get(reverse('staff-financial-for-staff', args=[staff.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data['payments']), 1)
        self.assertEqual(response.data['other_payments'], '1500.00')

    def test_staff_financial_for_unknown_staff_returns_404(self):
        response = self.client.get(reverse('staff-financial-for-staff', args=[9999]))

        self.assertEqual(response.status_code, 404)


class StaffSelfServiceFinanceTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.hostel = Hostel.objects.create(name='Staff Finance Hostel')
        self.user = get_user_model().objects.create_user(username='ramesh', password='pass12345', role='staff')
        self.staff = create_staff(
            hostel=self.hostel,
            employee_id='E20',
            staff_name='Ramesh',
            salary_amount=Decimal('16000.00'),
            user=self.user,
        )
        other = create_staff(hostel=self.hostel, employee_id='E21', staff_name='Gita', salary_amount=Decimal('17000'))
        create_staff_financial(staff=other, amount=Decimal('900.00'))
        create_salary(staff=other, month=3, year=2026)

    def test_staff_sees_only_own_payments(self):
        create_staff_financial(staff=self.staff, amount=Decimal('700.00'))
        self.client.force_authenticate(self.user)

        response = self.client.get(reverse('my_staff_financials'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([row['amount'] for row in response.data['payments']], ['700.00'])

    def test_salary_history_lists_own_salaries(self):
        create_salary(staff=self.staff, month=3, year=2026)
        create_salary(staff=self.staff, month=4, year=2026)
        self.client.force_authenticate(self.user)

        response = self.client.get(reverse('my_staff_salary_history'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([row['month'] for row in response.data], [4, 3])

    def test_students_cannot_read_staff_salary_history(self):
        student_user = get_user_model().objects.create_user(username='sabin', password='pass12345', role='student')
        self.client.force_authenticate(student_user)

        response = self.client.get(reverse('my_staff_salary_history'))

        self.assertEqual(response.status_code, 403)
