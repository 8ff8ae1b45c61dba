from rest_framework import generics, viewsets
from rest_framework.permissions import IsAuthenticated

from apps.core.attendance.services import occupant_for_user
from apps.core.users.audit import log_audit_event
from apps.core.users.permissions import IsAdminRole, IsOccupantRole

from .models import StaffAmenity, StudentAmenity
from .serializers import OccupantAmenitySerializer, StaffAmenitySerializer, StudentAmenitySerializer
from .services import amenities_for_occupant, create_staff_amenity, create_student_amenity, update_amenity


class AmenityViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated, IsAdminRole]
    owner_field = ''
    audit_name = ''

    def get_queryset(self):
        queryset = self.queryset.all()
        owner_id = self.request.query_params.get(self.owner_field)
        if owner_id:
            queryset = queryset.filter(**{f'{self.owner_field}_id': owner_id})
        return queryset

    def create_amenity(self, **data):
        raise NotImplementedError

    def perform_create(self, serializer):
        serializer.instance = self.create_amenity(**serializer.validated_data)
        log_audit_event(self.request, f'{self.audit_name}.created', target=serializer.instance)

    def perform_update(self, serializer):
        serializer.instance = update_amenity(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, f'{self.audit_name}.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        log_audit_event(self.request, f'{self.audit_name}.deleted', target=instance, details=f"Name={instance.name}")
        instance.delete()


class StudentAmenityViewSet(AmenityViewSet):
    queryset = StudentAmenity.objects.select_related('student')
    serializer_class = StudentAmenitySerializer
    owner_field = 'student'
    audit_name = 'student_amenity'

    def create_amenity(self, **data):
        return create_student_amenity(**data)


class StaffAmenityViewSet(AmenityViewSet):
    queryset = StaffAmenity.objects.select_related('staff')
    serializer_class = StaffAmenitySerializer
    owner_field = 'staff'
    audit_name = 'staff_amenity'

    def create_amenity(self, **data):
        return create_staff_amenity(**data)


class MyAmenityListView(generics.ListAPIView):
    serializer_class = OccupantAmenitySerializer
    permission_classes = [IsAuthenticated, IsOccupantRole]

    def get_queryset(self):
        return amenities_for_occupant(occupant_for_user(self.request.user))
