from django.shortcuts import get_object_or_404
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.core.hostels.models import Block, Room
from apps.core.staff.services import staff_for_user
from apps.core.users.audit import log_audit_event
from apps.core.users.models import User
from apps.core.users.permissions import IsAdminOrStaffRole

from .models import Inquiry, InquirySeater
from .serializers import InquirySeaterSerializer, InquirySerializer
from .services import create_inquiry, create_inquiry_seater, update_inquiry, update_inquiry_seater


def _desk_staff(request):
    """Staff users work only with the inquiries they recorded; admins see every hostel."""
    if request.user.role == User.ROLE_STAFF:
        return staff_for_user(request.user)
    return None


class InquiryViewSet(viewsets.ModelViewSet):
    serializer_class = InquirySerializer
    permission_classes = [IsAuthenticated, IsAdminOrStaffRole]

    def get_queryset(self):
        queryset = Inquiry.objects.select_related('block', 'recorded_by').prefetch_related('seaters__room__block')
        staff = _desk_staff(self.request)
        if staff is not None:
            queryset = queryset.filter(recorded_by=staff)
        params = self.request.query_params
        if params.get('hostel'):
            queryset = queryset.filter(hostel_id=params['hostel'])
        if params.get('search'):
            queryset = queryset.filter(name__icontains=params['search'])
        return queryset

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        staff = _desk_staff(self.request)
        if staff is not None:
            data['recorded_by'] = staff
        serializer.instance = create_inquiry(**data)
        log_audit_event(self.request, 'inquiry.created', target=serializer.instance)

    def perform_update(self, serializer):
        serializer.instance = update_inquiry(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, 'inquiry.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        log_audit_event(self.request, 'inquiry.deleted', target=instance, details=f"Name={instance.name}")
        instance.delete()

    @action(detail=False, methods=['get'], url_path=r'block/(?P<block_id>\d+)')
    def by_block(self, request, block_id=None):
        block = get_object_or_404(Block, pk=block_id)
        inquiries = self.get_queryset().filter(block=block)
        return Response(self.get_serializer(inquiries, many=True).data)


class InquirySeaterViewSet(viewsets.ModelViewSet):
    serializer_class = InquirySeaterSerializer
    permission_classes = [IsAuthenticated, IsAdminOrStaffRole]

    def get_queryset(self):
        queryset = InquirySeater.objects.select_related('inquiry', 'room', 'room__block')
        staff = _desk_staff(self.request)
        if staff is not None:
            queryset = queryset.filter(inquiry__recorded_by=staff)
        return queryset

    def _ensure_own_inquiry(self, inquiry):
        staff = _desk_staff(self.request)
        if staff is not None and inquiry.recorded_by_id != staff.pk:
            raise PermissionDenied('You can only offer rooms on inquiries you recorded.')

    def perform_create(self, serializer):
        self._ensure_own_inquiry(serializer.validated_data['inquiry'])
        serializer.instance = create_inquiry_seater(**serializer.validated_data)
        log_audit_event(self.request, 'inquiry_seater.created', target=serializer.instance)

    def perform_update(self, serializer):
        if 'inquiry' in serializer.validated_data:
            self._ensure_own_inquiry(serializer.validated_data['inquiry'])
        serializer.instance = update_inquiry_seater(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, 'inquiry_seater.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        log_audit_event(self.request, 'inquiry_seater.deleted', target=instance)
        instance.delete()

    @action(detail=False, methods=['get'], url_path=r'inquiry/(?P<inquiry_id>\d+)')
    def by_inquiry(self, request, inquiry_id=None):
        inquiry = get_object_or_404(Inquiry, pk=inquiry_id)
        seaters = self.get_queryset().filter(inquiry=inquiry)
        return Response(self.get_serializer(seaters, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'room/(?P<room_id>\d+)')
    def by_room(self, request, room_id=None):
        room = get_object_or_404(Room, pk=room_id)
        seaters = self.get_queryset().filter(room=room)
        return Response(self.get_serializer(seaters, many=True).data)
