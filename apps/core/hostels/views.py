from django.shortcuts import get_object_or_404
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.core.users.audit import log_audit_event
from apps.core.users.permissions import IsAdminRole

from .models import Block, Hostel, Room
from .serializers import BlockSerializer, HostelSerializer, RoomSerializer
from .services import (
    available_rooms,
    create_block,
    create_hostel,
    create_room,
    delete_block,
    delete_hostel,
    delete_room,
    update_block,
    update_hostel,
    update_room,
)


class HostelViewSet(viewsets.ModelViewSet):
    queryset = Hostel.objects.all()
    serializer_class = HostelSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def perform_create(self, serializer):
        serializer.instance = create_hostel(**serializer.validated_data)
        log_audit_event(self.request, 'hostel.created', target=serializer.instance)

    def perform_update(self, serializer):
        serializer.instance = update_hostel(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, 'hostel.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        delete_hostel(instance)
        log_audit_event(self.request, 'hostel.deleted', target=instance, details=f"Name={instance.name}")


class BlockViewSet(viewsets.ModelViewSet):
    serializer_class = BlockSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        queryset = Block.objects.select_related('hostel')
        hostel_id = self.request.query_params.get('hostel')
        if hostel_id:
            queryset = queryset.filter(hostel_id=hostel_id)
        return queryset

    def perform_create(self, serializer):
        serializer.instance = create_block(**serializer.validated_data)
        log_audit_event(
            self.request,
            'block.created',
            target=serializer.instance,
            details=f"Name={serializer.instance.block_name}",
        )

    def perform_update(self, serializer):
        serializer.instance = update_block(serializer.instance, **serializer.validated_data)
        log_audit_event(self.request, 'block.updated', target=serializer.instance)

    def perform_destroy(self, instance):
        delete_block(instance)
        log_audit_event(self.request, 'block.deleted', target=instance, details=f"Name={instance.block_name}")


class RoomViewSet(viewsets.ModelViewSet):
    serializer_class = RoomSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        queryset = Room.objects.select_related('block', 'hostel')
        hostel_id = self.request.query_params.get('hostel')
        block_id = self.request.query_params.get('block')
        status = self.request.query_params.get('status')

        if hostel_id:
            queryset = queryset.filter(hostel_id=hostel_id)
        if block_id:
            queryset = queryset.filter(block_id=block_id)
        if status:
            queryset = queryset.filter(status=status)
        return queryset

    def perform_create(self, serializer):
        serializer.instance = create_room(**serializer.validated_data)
        log_audit_event(
            self.request,
            'room.created',
            target=serializer.instance,
            details=f"Number={serializer.instance.room_number}; Capacity={serializer.instance.capacity}",
        )

    def perform_update(self, serializer):
        serializer.instance = update_room(serializer.instance, **serializer.validated_data)
        log_audit_event(
            self.request,
            'room.updated',
            target=serializer.instance,
            details=f"Capacity={serializer.instance.capacity}",
        )

    def perform_destroy(self, instance):
        delete_room(instance)
        log_audit_event(self.request, 'room.deleted', target=instance, details=f"Number={instance.room_number}")

    @action(detail=False, methods=['get'])
    def available(self, request):
        hostel = None
        block = None
        hostel_id = request.query_params.get('hostel')
        block_id = request.query_params.get('block')
        if hostel_id:
            hostel = get_object_or_404(Hostel, pk=hostel_id)
        if block_id:
            block = get_object_or_404(Block, pk=block_id)

        rooms = available_rooms(hostel=hostel, block=block)
        return Response(self.get_serializer(rooms, many=True).data)
