from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.hostels.models import Hostel
from apps.core.staff.models import Staff
from apps.core.staff.services import staff_for_user
from apps.core.students.models import Student
from apps.core.users.audit import log_audit_event
from apps.core.users.permissions import IsAdminRole, IsStaffRole

from .models import (
    Expense,
    ExpenseCategory,
    Income,
    IncomeType,
    PaymentType,
    Salary,
    StaffFinancial,
    StudentFinancial,
    Supplier,
    SupplierFinancial,
)
from .serializers import (
    ExpenseCategorySerializer,
    ExpenseSerializer,
    IncomeSerializer,
    IncomeTypeSerializer,
    PaymentTypeSerializer,
    SalaryGenerateSerializer,
    SalarySerializer,
    StaffFinancialHistorySerializer,
    StaffFinancialSerializer,
    StudentFinancialSerializer,
    StudentPaymentSerializer,
    SupplierFinancialSerializer,
    SupplierSerializer,
)
from . import services


class FinanceViewSet(viewsets.ModelViewSet):
    """Admin CRUD routed through the finance service layer."""

    permission_classes = [IsAuthenticated, IsAdminRole]
    audit_name = ''
    filter_fields = ()

    def create_record(self, **data):
        return services.create_record(self.queryset.model, **data)

    def update_record(self, instance, **data):
        return services.update_record(instance, **data)

    def get_queryset(self):
        queryset = super().get_queryset()
        filters = {
            field: self.request.query_params[field]
            for field in self.filter_fields
            if self.request.query_params.get(field)
        }
        return queryset.filter(**filters)

    def perform_create(self, serializer):
        serializer.instance = self.create_record(**serializer.validated_data)
        log_audit_event(self.request, f'{self.audit_name}.created', target=serializer.instance)

    def perform_update(self, serializer):
        serializer.instance = self.update_record(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, f'{self.audit_name}.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        log_audit_event(self.request, f'{self.audit_name}.deleted', target=instance)
        instance.delete()


class PaymentTypeViewSet(FinanceViewSet):
    queryset = PaymentType.objects.all()
    serializer_class = PaymentTypeSerializer
    audit_name = 'payment_type'


class IncomeTypeViewSet(FinanceViewSet):
    queryset = IncomeType.objects.all()
    serializer_class = IncomeTypeSerializer
    audit_name = 'income_type'
    filter_fields = ('hostel',)


class ExpenseCategoryViewSet(FinanceViewSet):
    queryset = ExpenseCategory.objects.all()
    serializer_class = ExpenseCategorySerializer
    audit_name = 'expense_category'
    filter_fields = ('hostel',)


class StudentFinancialViewSet(FinanceViewSet):
    queryset = StudentFinancial.objects.select_related('student')
    serializer_class = StudentFinancialSerializer
    audit_name = 'student_financial'
    filter_fields = ('student',)

    def create_record(self, **data):
        return services.create_student_financial(**data)

    def update_record(self, instance, **data):
        return services.update_student_financial(instance, **data)


class IncomeViewSet(FinanceViewSet):
    queryset = Income.objects.select_related('student', 'income_type', 'payment_type')
    serializer_class = IncomeSerializer
    audit_name = 'income'
    filter_fields = ('hostel', 'student', 'payment_status')

    def create_record(self, **data):
        return services.create_income(**data)

    def update_record(self, instance, **data):
        return services.update_income(instance, **data)

    @action(detail=False, methods=['post'], url_path=r'student-payment/(?P<student_id>\d+)')
    def student_payment(self, request, student_id=None):
        student = get_object_or_404(Student, pk=student_id)
        payload = StudentPaymentSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        income = services.apply_student_payment(student=student, **payload.validated_data)
        log_audit_event(request, 'income.student_payment', target=income, details=f"Amount={income.amount}")
        return Response(
            {
                'income': IncomeSerializer(income, context={'request': request}).data,
                'summary': services.student_financial_summary(student),
            },
            status=status.HTTP_201_CREATED,
        )


class ExpenseViewSet(FinanceViewSet):
    queryset = Expense.objects.select_related('expense_category', 'student', 'staff')
    serializer_class = ExpenseSerializer
    audit_name = 'expense'
    filter_fields = ('hostel', 'expense_category', 'payment_status')

    def create_record(self, **data):
        return services.create_expense(**data)

    def update_record(self, instance, **data):
        return services.update_expense(instance, **data)


class SalaryViewSet(FinanceViewSet):
    queryset = Salary.objects.select_related('staff')
    serializer_class = SalarySerializer
    audit_name = 'salary'
    filter_fields = ('staff', 'month', 'year', 'status')

    def create_record(self, **data):
        return services.create_salary(**data)

    def update_record(self, instance, **data):
        return services.update_salary(instance, **data)

    @action(detail=True, methods=['post'], url_path='mark-paid')
    def mark_paid(self, request, pk=None):
        salary = services.mark_salary_paid(self.get_object())
        log_audit_event(request, 'salary.paid', target=salary)
        return Response(self.get_serializer(salary).data)

    @action(detail=False, methods=['post'])
    def generate(self, request):
        payload = SalaryGenerateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        hostel = get_object_or_404(Hostel, pk=payload.validated_data['hostel'])
        salaries = services.generate_monthly_salaries(
            hostel=hostel,
            month=payload.validated_data['month'],
            year=payload.validated_data['year'],
        )
        log_audit_event(request, 'salary.generated', target=hostel, details=f"Created={len(salaries)}")
        return Response(self.get_serializer(salaries, many=True).data, status=status.HTTP_201_CREATED)


class SupplierViewSet(FinanceViewSet):
    queryset = Supplier.objects.all()
    serializer_class = SupplierSerializer
    audit_name = 'supplier'
    filter_fields = ('hostel',)


class SupplierFinancialViewSet(FinanceViewSet):
    queryset = SupplierFinancial.objects.select_related('supplier', 'payment_type')
    serializer_class = SupplierFinancialSerializer
    audit_name = 'supplier_financial'
    filter_fields = ('supplier',)

    def create_record(self, **data):
        return services.create_supplier_financial(**data)

    def update_record(self, instance, **data):
        return services.update_supplier_financial(instance, **data)


class StaffFinancialViewSet(FinanceViewSet):
    queryset = StaffFinancial.objects.select_related('staff', 'payment_type')
    serializer_class = StaffFinancialSerializer
    audit_name = 'staff_financial'
    filter_fields = ('staff', 'payment_type')

    def create_record(self, **data):
        return services.create_staff_financial(**data)

    def update_record(self, instance, **data):
        return services.update_staff_financial(instance, **data)

    @action(detail=False, methods=['get'], url_path=r'staff/(?P<staff_id>\d+)')
    def for_staff(self, request, staff_id=None):
        staff = get_object_or_404(Staff, pk=staff_id)
        history = services.staff_financial_history(staff)
        return Response(StaffFinancialHistorySerializer(history, context={'request': request}).data)


class MyStaffFinancialsView(APIView):
    permission_classes = [IsAuthenticated, IsStaffRole]

    def get(self, request):
        staff = staff_for_user(request.user)
        history = services.staff_financial_history(staff)
        return Response(StaffFinancialHistorySerializer(history, context={'request': request}).data)


class MySalaryHistoryView(APIView):
    permission_classes = [IsAuthenticated, IsStaffRole]

    def get(self, request):
        staff = staff_for_user(request.user)
        return Response(SalarySerializer(staff.salaries.all(), many=True, context={'request': request}).data)
