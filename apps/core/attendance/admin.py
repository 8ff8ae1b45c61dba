from django.contrib import admin

from .models import CheckInCheckOut, CheckoutFinancial, CheckoutRule


@admin.register(CheckoutRule)
class CheckoutRuleAdmin(admin.ModelAdmin):
    list_display = ('id', 'student', 'staff', 'active_after_days', 'percentage', 'is_active')
    list_filter = ('is_active',)


@admin.register(CheckInCheckOut)
class CheckInCheckOutAdmin(admin.ModelAdmin):
    list_display = ('date', 'student', 'staff', 'block', 'status', 'checkout_time', 'checkin_time', 'checkout_duration')
    list_filter = ('status', 'block')
    date_hierarchy = 'date'


@admin.register(CheckoutFinancial)
class CheckoutFinancialAdmin(admin.ModelAdmin):
    list_display = ('checkout', 'student', 'staff', 'checkout_duration', 'percentage', 'deducted_amount', 'created_at')
    readonly_fields = (
        'student',
        'staff',
        'checkout',
        'checkout_rule',
        'checkout_duration',
        'base_amount',
        'percentage',
        'deducted_amount',
    )

    def has_delete_permission(self, request, obj=None):
        return False
