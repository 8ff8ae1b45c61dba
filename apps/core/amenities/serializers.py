from rest_framework import serializers

from .models import StaffAmenity, StudentAmenity


class StudentAmenitySerializer(serializers.ModelSerializer):
    student_name = serializers.CharField(source='student.student_name', read_only=True)

    class Meta:
        model = StudentAmenity
        fields = ['id', 'student', 'student_name', 'name', 'description', 'created_at']
        read_only_fields = ['created_at']
        validators = []


class StaffAmenitySerializer(serializers.ModelSerializer):
    staff_name = serializers.CharField(source='staff.staff_name', read_only=True)

    class Meta:
        model = StaffAmenity
        fields = ['id', 'staff', 'staff_name', 'name', 'description', 'created_at']
        read_only_fields = ['created_at']
        validators = []


class OccupantAmenitySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField()
