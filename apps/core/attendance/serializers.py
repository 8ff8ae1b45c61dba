from rest_framework import serializers

from apps.core.hostels.models import Block
from apps.core.staff.models import Staff
from apps.core.students.models import Student

from .models import CheckInCheckOut, CheckoutFinancial, CheckoutRule


class OccupantChoiceMixin:
    def validate(self, attrs):
        attrs = super().validate(attrs)
        student = attrs.get('student', getattr(self.instance, 'student', None))
        staff = attrs.get('staff', getattr(self.instance, 'staff', None))
        if bool(student) == bool(staff):
            raise serializers.ValidationError('Provide exactly one of student or staff.')
        return attrs


class CheckoutRuleSerializer(OccupantChoiceMixin, serializers.ModelSerializer):
    occupant_name = serializers.CharField(read_only=True)
    occupant_type = serializers.CharField(read_only=True)

    class Meta:
        model = CheckoutRule
        fields = [
            'id',
            'student',
            'staff',
            'occupant_type',
            'occupant_name',
            'is_active',
            'active_after_days',
            'percentage',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']


class CheckoutFinancialSerializer(serializers.ModelSerializer):
    occupant_name = serializers.CharField(read_only=True)
    occupant_type = serializers.CharField(read_only=True)

    class Meta:
        model = CheckoutFinancial
        fields = [
            'id',
            'student',
            'staff',
            'occupant_type',
            'occupant_name',
            'checkout',
            'checkout_rule',
            'checkout_duration',
            'base_amount',
            'percentage',
            'deducted_amount',
            'created_at',
        ]
        read_only_fields = fields


class CheckInCheckOutSerializer(serializers.ModelSerializer):
    occupant_name = serializers.CharField(read_only=True)
    occupant_type = serializers.CharField(read_only=True)
    block_name = serializers.CharField(source='block.block_name', read_only=True)
    deducted_amount = serializers.SerializerMethodField()

    class Meta:
        model = CheckInCheckOut
        fields = [
            'id',
            'student',
            'staff',
            'occupant_type',
            'occupant_name',
            'block',
            'block_name',
            'checkout_rule',
            'date',
            'requested_checkout_time',
            'checkout_time',
            'checkin_time',
            'estimated_checkin_date',
            'checkout_duration',
            'status',
            'remarks',
            'reviewed_by',
            'deducted_amount',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_deducted_amount(self, obj):
        entry = CheckoutFinancial.objects.filter(checkout=obj).only('deducted_amount').first()
        return str(entry.deducted_amount) if entry else None


class CheckoutRecordSerializer(OccupantChoiceMixin, serializers.Serializer):
    student = serializers.PrimaryKeyRelatedField(queryset=Student.objects.all(), required=False, allow_null=True)
    staff = serializers.PrimaryKeyRelatedField(queryset=Staff.objects.all(), required=False, allow_null=True)
    block = serializers.PrimaryKeyRelatedField(queryset=Block.objects.all(), required=False, allow_null=True)
    checkout_time = serializers.DateTimeField()
    checkin_time = serializers.DateTimeField(required=False, allow_null=True)
    estimated_checkin_date = serializers.DateField(required=False, allow_null=True)
    remarks = serializers.CharField(required=False, allow_blank=True, default='')


class CheckoutRequestSerializer(serializers.Serializer):
    block = serializers.PrimaryKeyRelatedField(queryset=Block.objects.all(), required=False, allow_null=True)
    requested_checkout_time = serializers.DateTimeField(required=False, allow_null=True)
    estimated_checkin_date = serializers.DateField(required=False, allow_null=True)
    remarks = serializers.CharField(required=False, allow_blank=True, default='')


class CheckInSerializer(serializers.Serializer):
    block = serializers.PrimaryKeyRelatedField(queryset=Block.objects.all(), required=False, allow_null=True)
    checkin_time = serializers.DateTimeField(required=False, allow_null=True)


class ReviewSerializer(serializers.Serializer):
    remarks = serializers.CharField(required=False, allow_blank=True)
