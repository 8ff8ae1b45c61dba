from django.contrib import admin

from .models import Notice


@admin.register(Notice)
class NoticeAdmin(admin.ModelAdmin):
    list_display = ('title', 'hostel', 'target_type', 'notice_type', 'status', 'schedule_time')
    list_filter = ('hostel', 'target_type', 'notice_type', 'status')
    search_fields = ('title', 'description')
