from rest_framework import serializers

from .models import Chat, Complain
from .services import can_delete, can_edit, edit_time_remaining


class ComplainSerializer(serializers.ModelSerializer):
    owner_type = serializers.CharField(read_only=True)
    owner_name = serializers.CharField(read_only=True)

    class Meta:
        model = Complain
        fields = [
            'id',
            'student',
            'staff',
            'owner_type',
            'owner_name',
            'title',
            'description',
            'complain_attachment',
            'status',
            'total_messages',
            'unread_admin_messages',
            'unread_student_messages',
            'unread_staff_messages',
            'last_message_at',
            'last_message_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'student',
            'staff',
            'status',
            'total_messages',
            'unread_admin_messages',
            'unread_student_messages',
            'unread_staff_messages',
            'last_message_at',
            'last_message_by',
            'created_at',
            'updated_at',
        ]


class ComplainStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Complain.STATUS_CHOICES)


class ChatSerializer(serializers.ModelSerializer):
    """Rendered from the point of view of ``context['sender']``."""

    message = serializers.CharField(source='display_message', read_only=True)
    can_edit = serializers.SerializerMethodField()
    can_delete = serializers.SerializerMethodField()
    edit_time_remaining = serializers.SerializerMethodField()
    is_mine = serializers.SerializerMethodField()

    class Meta:
        model = Chat
        fields = [
            'id',
            'complain',
            'sender_type',
            'sender_id',
            'message',
            'message_type',
            'attachment',
            'is_edited',
            'is_deleted',
            'is_read',
            'edited_at',
            'deleted_at',
            'read_at',
            'created_at',
            'is_mine',
            'can_edit',
            'can_delete',
            'edit_time_remaining',
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance.is_deleted:
            data['attachment'] = None
            data['message_type'] = Chat.TYPE_TEXT
        return data

    def _sender(self):
        return self.context.get('sender')

    def get_is_mine(self, obj):
        return obj.sender == self._sender()

    def get_can_edit(self, obj):
        sender = self._sender()
        return sender is not None and can_edit(obj, sender)

    def get_can_delete(self, obj):
        sender = self._sender()
        return sender is not None and can_delete(obj, sender)

    def get_edit_time_remaining(self, obj):
        sender = self._sender()
        return edit_time_remaining(obj, sender) if sender is not None else 0


class SendMessageSerializer(serializers.Serializer):
    complain_id = serializers.PrimaryKeyRelatedField(source='complain', queryset=Complain.objects.all())
    message = serializers.CharField(required=False, allow_blank=True, default='')
    message_type = serializers.ChoiceField(choices=Chat.MESSAGE_TYPE_CHOICES, default=Chat.TYPE_TEXT)
    attachment = serializers.FileField(required=False, allow_null=True)


class EditMessageSerializer(serializers.Serializer):
    message = serializers.CharField()


class MarkThreadReadSerializer(serializers.Serializer):
    complain_id = serializers.PrimaryKeyRelatedField(source='complain', queryset=Complain.objects.all())
