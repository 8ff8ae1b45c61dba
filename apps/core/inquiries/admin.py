from django.contrib import admin

from .models import Inquiry, InquirySeater


class InquirySeaterInline(admin.TabularInline):
    model = InquirySeater
    extra = 0


@admin.register(Inquiry)
class InquiryAdmin(admin.ModelAdmin):
    list_display = ('name', 'phone', 'hostel', 'block', 'seater_type', 'created_at')
    list_filter = ('hostel', 'seater_type')
    search_fields = ('name', 'phone', 'email')
    inlines = [InquirySeaterInline]
