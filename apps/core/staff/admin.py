from django.contrib import admin

from .models import Staff


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ('employee_id', 'staff_name', 'hostel', 'position', 'salary_amount', 'is_active')
    list_filter = ('hostel', 'employment_type', 'is_active')
    search_fields = ('employee_id', 'staff_name', 'email', 'contact_number')
