from rest_framework import serializers

from .models import Inquiry, InquirySeater


class InquirySeaterSerializer(serializers.ModelSerializer):
    room_number = serializers.CharField(source='room.room_number', read_only=True)
    block = serializers.IntegerField(source='room.block_id', read_only=True)
    block_name = serializers.CharField(source='room.block.block_name', read_only=True)
    seater_label = serializers.CharField(read_only=True)

    class Meta:
        model = InquirySeater
        fields = [
            'id',
            'inquiry',
            'room',
            'room_number',
            'block',
            'block_name',
            'seater_type',
            'seater_label',
            'notes',
            'created_at',
        ]
        read_only_fields = ['created_at']
        validators = []


class InquirySerializer(serializers.ModelSerializer):
    block_name = serializers.CharField(source='block.block_name', read_only=True, default=None)
    recorded_by_name = serializers.CharField(source='recorded_by.staff_name', read_only=True, default=None)
    seater_label = serializers.CharField(source='get_seater_type_display', read_only=True)
    seaters = InquirySeaterSerializer(many=True, read_only=True)

    class Meta:
        model = Inquiry
        fields = [
            'id',
            'hostel',
            'block',
            'block_name',
            'recorded_by',
            'recorded_by_name',
            'name',
            'email',
            'phone',
            'seater_type',
            'seater_label',
            'description',
            'seaters',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['recorded_by', 'created_at', 'updated_at']
