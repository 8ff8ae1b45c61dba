from rest_framework import serializers

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


class PaymentTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentType
        fields = ['id', 'name', 'description', 'is_active']


class IncomeTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = IncomeType
        fields = ['id', 'hostel', 'title', 'description', 'created_at']
        read_only_fields = ['created_at']


class ExpenseCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ExpenseCategory
        fields = ['id', 'hostel', 'name', 'description', 'created_at']
        read_only_fields = ['created_at']


class StudentFinancialSerializer(serializers.ModelSerializer):
    student_name = serializers.CharField(source='student.student_name', read_only=True)

    class Meta:
        model = StudentFinancial
        fields = [
            'id',
            'student',
            'student_name',
            'monthly_fee',
            'admission_fee',
            'security_deposit',
            'balance_type',
            'initial_balance',
            'payment_date',
            'payment_type',
            'remark',
            'created_at',
        ]
        read_only_fields = ['created_at']


class IncomeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Income
        fields = [
            'id',
            'hostel',
            'student',
            'income_type',
            'payment_type',
            'title',
            'amount',
            'received_amount',
            'due_amount',
            'payment_status',
            'income_date',
            'description',
            'created_at',
        ]
        read_only_fields = ['due_amount', 'payment_status', 'created_at']


class StudentPaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_type = serializers.PrimaryKeyRelatedField(
        queryset=PaymentType.objects.all(),
        required=False,
        allow_null=True,
    )
    remark = serializers.CharField(required=False, allow_blank=True, default='')


class ExpenseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Expense
        fields = [
            'id',
            'hostel',
            'expense_category',
            'student',
            'staff',
            'title',
            'amount',
            'expense_date',
            'payment_status',
            'payment_method',
            'description',
            'receipt',
            'created_at',
        ]
        read_only_fields = ['created_at']


class SalarySerializer(serializers.ModelSerializer):
    staff_name = serializers.CharField(source='staff.staff_name', read_only=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)

    class Meta:
        model = Salary
        fields = ['id', 'staff', 'staff_name', 'month', 'year', 'amount', 'status', 'paid_on', 'remarks', 'created_at']
        read_only_fields = ['created_at']
        validators = []


class SalaryGenerateSerializer(serializers.Serializer):
    hostel = serializers.IntegerField()
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000)


class SupplierSerializer(serializers.ModelSerializer):
    class Meta:
        model = Supplier
        fields = ['id', 'hostel', 'name', 'contact_number', 'email', 'address', 'pan_number', 'is_active', 'created_at']
        read_only_fields = ['created_at']


class SupplierFinancialSerializer(serializers.ModelSerializer):
    supplier_name = serializers.CharField(source='supplier.name', read_only=True)
    due_amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = SupplierFinancial
        fields = [
            'id',
            'supplier',
            'supplier_name',
            'payment_type',
            'amount',
            'paid_amount',
            'due_amount',
            'payment_date',
            'remark',
            'created_at',
        ]
        read_only_fields = ['created_at']


class StaffFinancialSerializer(serializers.ModelSerializer):
    staff_name = serializers.CharField(source='staff.staff_name', read_only=True)
    payment_type_name = serializers.CharField(source='payment_type.name', read_only=True, default=None)

    class Meta:
        model = StaffFinancial
        fields = [
            'id',
            'staff',
            'staff_name',
            'amount',
            'payment_date',
            'payment_type',
            'payment_type_name',
            'remark',
            'created_at',
        ]
        read_only_fields = ['created_at']


class StaffFinancialHistorySerializer(serializers.Serializer):
    salaries = SalarySerializer(many=True)
    payments = StaffFinancialSerializer(many=True)
    salary_paid = serializers.DecimalField(max_digits=12, decimal_places=2)
    salary_pending = serializers.DecimalField(max_digits=12, decimal_places=2)
    other_payments = serializers.DecimalField(max_digits=12, decimal_places=2)
