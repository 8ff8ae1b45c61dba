from django.contrib import admin

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


@admin.register(StudentFinancial)
class StudentFinancialAdmin(admin.ModelAdmin):
    list_display = ('student', 'monthly_fee', 'balance_type', 'initial_balance', 'payment_date')
    list_filter = ('balance_type',)
    search_fields = ('student__student_name', 'student__registration_number')


@admin.register(Income)
class IncomeAdmin(admin.ModelAdmin):
    list_display = ('title', 'hostel', 'student', 'amount', 'received_amount', 'payment_status', 'income_date')
    list_filter = ('hostel', 'payment_status', 'income_type')
    search_fields = ('title', 'student__student_name')


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ('title', 'hostel', 'expense_category', 'amount', 'payment_status', 'expense_date')
    list_filter = ('hostel', 'payment_status', 'payment_method')
    search_fields = ('title',)


@admin.register(Salary)
class SalaryAdmin(admin.ModelAdmin):
    list_display = ('staff', 'month', 'year', 'amount', 'status', 'paid_on')
    list_filter = ('status', 'year', 'month')
    search_fields = ('staff__staff_name', 'staff__employee_id')


@admin.register(SupplierFinancial)
class SupplierFinancialAdmin(admin.ModelAdmin):
    list_display = ('supplier', 'amount', 'paid_amount', 'payment_date')
    list_filter = ('supplier',)


admin.site.register(PaymentType)
admin.site.register(IncomeType)
admin.site.register(ExpenseCategory)
admin.site.register(Supplier)


@admin.register(StaffFinancial)
class StaffFinancialAdmin(admin.ModelAdmin):
    list_display = ('staff', 'amount', 'payment_type', 'payment_date')
    list_filter = ('payment_type',)
    search_fields = ('staff__staff_name', 'staff__employee_id')
