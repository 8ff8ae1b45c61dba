from django.contrib import admin

from .models import StaffAmenity, StudentAmenity


@admin.register(StudentAmenity)
class StudentAmenityAdmin(admin.ModelAdmin):
    list_display = ('name', 'student', 'created_at')
    search_fields = ('name', 'student__student_name')


@admin.register(StaffAmenity)
class StaffAmenityAdmin(admin.ModelAdmin):
    list_display = ('name', 'staff', 'created_at')
    search_fields = ('name', 'staff__staff_name')
