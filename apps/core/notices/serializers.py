from rest_framework import serializers

from .models import Notice


class NoticeSerializer(serializers.ModelSerializer):
    block_name = serializers.CharField(source='block.block_name', read_only=True, default=None)

    class Meta:
        model = Notice
        fields = [
            'id',
            'hostel',
            'title',
            'description',
            'notice_attachment',
            'target_type',
            'student',
            'staff',
            'block',
            'block_name',
            'notice_type',
            'status',
            'schedule_time',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_by', 'created_at', 'updated_at']
