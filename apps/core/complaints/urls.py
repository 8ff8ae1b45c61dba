from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import (
    ComplainViewSet,
    ComplaintChatView,
    EditMessageView,
    MarkMessageReadView,
    MarkThreadReadView,
    MessageDetailView,
    MyComplainListView,
    SendMessageView,
    UnreadCountView,
)

router = SimpleRouter()
router.register('complains', ComplainViewSet, basename='complain')

urlpatterns = [
    path('my/complains/', MyComplainListView.as_view(), name='my_complains'),
    path('chats/complaint/<int:complain_id>/', ComplaintChatView.as_view(), name='chat_thread'),
    path('chats/send/', SendMessageView.as_view(), name='chat_send'),
    path('chats/mark-read/', MarkThreadReadView.as_view(), name='chat_mark_read'),
    path('chats/unread-count/', UnreadCountView.as_view(), name='chat_unread_count'),
    path('chats/<int:chat_id>/edit/', EditMessageView.as_view(), name='chat_edit'),
    path('chats/<int:chat_id>/read/', MarkMessageReadView.as_view(), name='chat_read'),
    path('chats/<int:chat_id>/', MessageDetailView.as_view(), name='chat_detail'),
] + router.urls
