from django.contrib import admin

from .models import Chat, Complain


class ChatInline(admin.TabularInline):
    model = Chat
    extra = 0
    fields = ('sender_type', 'sender_id', 'message', 'is_edited', 'is_deleted', 'is_read', 'created_at')
    readonly_fields = ('created_at',)


@admin.register(Complain)
class ComplainAdmin(admin.ModelAdmin):
    list_display = ('title', 'student', 'staff', 'status', 'total_messages', 'unread_admin_messages', 'last_message_at')
    list_filter = ('status',)
    search_fields = ('title', 'description')
    inlines = [ChatInline]
