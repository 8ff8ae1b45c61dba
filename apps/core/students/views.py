from django.shortcuts import get_object_or_404
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.finance.services import student_financial_summary
from apps.core.hostels.models import Room
from apps.core.users.audit import log_audit_event
from apps.core.users.permissions import IsAdminRole, IsStudentRole

from .models import Student
from .serializers import StudentRoomSerializer, StudentSerializer
from .services import assign_room, create_student, deactivate_student, student_for_user, update_student


class StudentViewSet(viewsets.ModelViewSet):
    serializer_class = StudentSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        queryset = Student.objects.select_related('hostel', 'room', 'room__block')
        params = self.request.query_params
        if params.get('hostel'):
            queryset = queryset.filter(hostel_id=params['hostel'])
        if params.get('room'):
            queryset = queryset.filter(room_id=params['room'])
        if params.get('block'):
            queryset = queryset.filter(room__block_id=params['block'])
        if params.get('active') in ('1', 'true'):
            queryset = queryset.filter(is_active=True)
        elif params.get('active') in ('0', 'false'):
            queryset = queryset.filter(is_active=False)
        if params.get('search'):
            queryset = queryset.filter(student_name__icontains=params['search'])
        return queryset

    def perform_create(self, serializer):
        serializer.instance = create_student(**serializer.validated_data)
        log_audit_event(
            self.request,
            'student.created',
            target=serializer.instance,
            details=f"Registration={serializer.instance.registration_number}; Room={serializer.instance.room_id}",
        )

    def perform_update(self, serializer):
        serializer.instance = update_student(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, 'student.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        deactivate_student(instance)
        log_audit_event(self.request, 'student.deactivated', target=instance)

    @action(detail=True, methods=['post'], url_path='assign-room')
    def assign_room(self, request, pk=None):
        student = self.get_object()
        payload = StudentRoomSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        room_id = payload.validated_data['room']
        room = get_object_or_404(Room, pk=room_id) if room_id else None
        student = assign_room(student, room)
        log_audit_event(request, 'student.room_assigned', target=student, details=f"Room={room_id}")
        return Response(self.get_serializer(student).data)

    @action(detail=True, methods=['get'], url_path='financial-summary')
    def financial_summary(self, request, pk=None):
        return Response(student_financial_summary(self.get_object()))


class StudentProfileView(APIView):
    permission_classes = [IsAuthenticated, IsStudentRole]

    def get(self, request):
        student = student_for_user(request.user)
        return Response(StudentSerializer(student, context={'request': request}).data)
