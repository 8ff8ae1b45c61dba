from django.contrib import admin

from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ('registration_number', 'student_name', 'hostel', 'room', 'is_active')
    list_filter = ('hostel', 'is_active', 'blood_group')
    search_fields = ('registration_number', 'student_name', 'email', 'contact_number')
    raw_id_fields = ('room', 'user')
