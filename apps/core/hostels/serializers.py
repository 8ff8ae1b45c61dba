from rest_framework import serializers

from .models import Block, Hostel, Room


class HostelSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hostel
        fields = ['id', 'name', 'address', 'contact_number', 'email', 'is_active', 'created_at']
        read_only_fields = ['created_at']


class BlockSerializer(serializers.ModelSerializer):
    room_count = serializers.SerializerMethodField()

    class Meta:
        model = Block
        fields = [
            'id',
            'hostel',
            'block_name',
            'location',
            'manager_name',
            'manager_contact',
            'remarks',
            'block_attachment',
            'room_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    def get_room_count(self, obj):
        return obj.rooms.count()


class RoomSerializer(serializers.ModelSerializer):
    block_name = serializers.CharField(source='block.block_name', read_only=True)
    occupant_count = serializers.IntegerField(read_only=True)
    available_beds = serializers.IntegerField(read_only=True)

    class Meta:
        model = Room
        fields = [
            'id',
            'hostel',
            'block',
            'block_name',
            'room_number',
            'capacity',
            'room_type',
            'floor_number',
            'status',
            'room_attachment',
            'occupant_count',
            'available_beds',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {
            'hostel': {'required': False},
        }
