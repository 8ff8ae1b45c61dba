from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import (
    ExpenseCategoryViewSet,
    ExpenseViewSet,
    IncomeTypeViewSet,
    IncomeViewSet,
    MySalaryHistoryView,
    MyStaffFinancialsView,
    PaymentTypeViewSet,
    SalaryViewSet,
    StaffFinancialViewSet,
    StudentFinancialViewSet,
    SupplierFinancialViewSet,
    SupplierViewSet,
)

router = SimpleRouter()
router.register('payment-types', PaymentTypeViewSet, basename='payment-type')
router.register('income-types', IncomeTypeViewSet, basename='income-type')
router.register('incomes', IncomeViewSet, basename='income')
router.register('expense-categories', ExpenseCategoryViewSet, basename='expense-category')
router.register('expenses', ExpenseViewSet, basename='expense')
router.register('salaries', SalaryViewSet, basename='salary')
router.register('suppliers', SupplierViewSet, basename='supplier')
router.register('supplier-financials', SupplierFinancialViewSet, basename='supplier-financial')
router.register('student-financials', StudentFinancialViewSet, basename='student-financial')
router.register('staff-financials', StaffFinancialViewSet, basename='staff-financial')

urlpatterns = [
    path('my-staff/financials/', MyStaffFinancialsView.as_view(), name='my_staff_financials'),
    path('my-staff/salary-history/', MySalaryHistoryView.as_view(), name='my_staff_salary_history'),
] + router.urls
