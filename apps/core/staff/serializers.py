from rest_framework import serializers

from .models import Staff


class StaffSerializer(serializers.ModelSerializer):
    hostel_name = serializers.CharField(source='hostel.name', read_only=True)

    class Meta:
        model = Staff
        fields = [
            'id',
            'hostel',
            'hostel_name',
            'user',
            'employee_id',
            'staff_name',
            'date_of_birth',
            'contact_number',
            'email',
            'address',
            'position',
            'department',
            'joining_date',
            'employment_type',
            'salary_amount',
            'photo',
            'contract_document',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['is_active', 'created_at', 'updated_at']
