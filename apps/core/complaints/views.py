from django.shortcuts import get_object_or_404
from rest_framework import generics, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.users.audit import log_audit_event
from apps.core.users.permissions import IsAdminRole, IsOccupantRole

from .models import Chat, Complain
from .senders import sender_for_user
from .serializers import (
    ChatSerializer,
    ComplainSerializer,
    ComplainStatusSerializer,
    EditMessageSerializer,
    MarkThreadReadSerializer,
    SendMessageSerializer,
)
from .services import (
    complaints_for_sender,
    create_complain,
    delete_message,
    edit_message,
    ensure_can_access,
    mark_read,
    mark_thread_read,
    messages_for,
    owner_kwargs,
    send_message,
    unread_count_for,
    update_complain_status,
)


def request_sender(request):
    sender = sender_for_user(request.user)
    if sender is None:
        raise PermissionDenied('This account has no chat identity.')
    return sender


class ComplainViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = ComplainSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]

    def get_queryset(self):
        queryset = Complain.objects.select_related('student', 'staff')
        params = self.request.query_params
        if params.get('status'):
            queryset = queryset.filter(status=params['status'])
        if params.get('student'):
            queryset = queryset.filter(student_id=params['student'])
        if params.get('staff'):
            queryset = queryset.filter(staff_id=params['staff'])
        return queryset

    def perform_destroy(self, instance):
        log_audit_event(self.request, 'complain.deleted', target=instance, details=f"Title={instance.title}")
        instance.delete()

    @action(detail=True, methods=['post', 'patch'], url_path='status')
    def change_status(self, request, pk=None):
        payload = ComplainStatusSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        complain = update_complain_status(self.get_object(), payload.validated_data['status'])
        log_audit_event(request, 'complain.status_changed', target=complain, details=f"Status={complain.status}")
        return Response(self.get_serializer(complain).data)


class MyComplainListView(generics.ListCreateAPIView):
    serializer_class = ComplainSerializer
    permission_classes = [IsAuthenticated, IsOccupantRole]

    def get_queryset(self):
        return complaints_for_sender(request_sender(self.request))

    def perform_create(self, serializer):
        owner = owner_kwargs(request_sender(self.request))
        serializer.instance = create_complain(**owner, **serializer.validated_data)
        log_audit_event(self.request, 'complain.created', target=serializer.instance)


class ComplaintChatView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, complain_id):
        sender = request_sender(request)
        complain = get_object_or_404(Complain, pk=complain_id)
        ensure_can_access(complain, sender)

        chats = messages_for(complain)
        return Response({
            'complain': ComplainSerializer(complain).data,
            'messages': ChatSerializer(chats, many=True, context={'sender': sender}).data,
        })


class SendMessageView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        sender = request_sender(request)
        payload = SendMessageSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        chat = send_message(sender=sender, sent_by=request.user, **payload.validated_data)
        return Response(ChatSerializer(chat, context={'sender': sender}).data, status=status.HTTP_201_CREATED)


class EditMessageView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, chat_id):
        sender = request_sender(request)
        payload = EditMessageSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        chat = edit_message(
            get_object_or_404(Chat, pk=chat_id),
            sender=sender,
            message=payload.validated_data['message'],
        )
        return Response(ChatSerializer(chat, context={'sender': sender}).data)

    put = post
    patch = post


class MessageDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request, chat_id):
        sender = request_sender(request)
        chat = delete_message(get_object_or_404(Chat, pk=chat_id), sender=sender)
        return Response(ChatSerializer(chat, context={'sender': sender}).data)


class MarkMessageReadView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, chat_id):
        sender = request_sender(request)
        chat = mark_read(get_object_or_404(Chat, pk=chat_id), reader=sender)
        return Response(ChatSerializer(chat, context={'sender': sender}).data)


class MarkThreadReadView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        sender = request_sender(request)
        payload = MarkThreadReadSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        updated = mark_thread_read(payload.validated_data['complain'], reader=sender)
        return Response({'marked_read': updated})


class UnreadCountView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({'unread_count': unread_count_for(request_sender(request))})
