from rest_framework import serializers

from .models import Student


class StudentSerializer(serializers.ModelSerializer):
    room_number = serializers.CharField(source='room.room_number', read_only=True, default=None)
    block_name = serializers.CharField(source='room.block.block_name', read_only=True, default=None)

    class Meta:
        model = Student
        fields = [
            'id',
            'hostel',
            'user',
            'room',
            'room_number',
            'block_name',
            'registration_number',
            'student_name',
            'date_of_birth',
            'contact_number',
            'email',
            'address',
            'educational_institution',
            'level_of_study',
            'blood_group',
            'food',
            'disease',
            'guardian_name',
            'guardian_contact',
            'guardian_relation',
            'photo',
            'joining_date',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']


class StudentRoomSerializer(serializers.Serializer):
    room = serializers.IntegerField(allow_null=True)
