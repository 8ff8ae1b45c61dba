from django.contrib import admin

from .models import Block, Hostel, Room


@admin.register(Hostel)
class HostelAdmin(admin.ModelAdmin):
    list_display = ('name', 'contact_number', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('name', 'address')


@admin.register(Block)
class BlockAdmin(admin.ModelAdmin):
    list_display = ('block_name', 'hostel', 'manager_name', 'manager_contact')
    list_filter = ('hostel',)
    search_fields = ('block_name', 'location', 'manager_name')


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ('room_number', 'block', 'hostel', 'capacity', 'room_type', 'status')
    list_filter = ('hostel', 'block', 'status', 'room_type')
    search_fields = ('room_number',)
