from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.users.audit import log_audit_event
from apps.core.users.permissions import IsAdminRole, IsStaffRole

from .models import Staff
from .serializers import StaffSerializer
from .services import create_staff, deactivate_staff, staff_for_user, update_staff


class StaffViewSet(viewsets.ModelViewSet):
    serializer_class = StaffSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        queryset = Staff.objects.select_related('hostel')
        hostel_id = self.request.query_params.get('hostel')
        active = self.request.query_params.get('active')
        if hostel_id:
            queryset = queryset.filter(hostel_id=hostel_id)
        if active in ('1', 'true'):
            queryset = queryset.filter(is_active=True)
        elif active in ('0', 'false'):
            queryset = queryset.filter(is_active=False)
        return queryset

    def perform_create(self, serializer):
        serializer.instance = create_staff(**serializer.validated_data)
        log_audit_event(
            self.request,
            'staff.created',
            target=serializer.instance,
            details=f"EmployeeID={serializer.instance.employee_id}",
        )

    def perform_update(self, serializer):
        serializer.instance = update_staff(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, 'staff.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        deactivate_staff(instance)
        log_audit_event(self.request, 'staff.deactivated', target=instance)


class StaffProfileView(APIView):
    permission_classes = [IsAuthenticated, IsStaffRole]

    def get(self, request):
        staff = staff_for_user(request.user)
        return Response(StaffSerializer(staff, context={'request': request}).data)
