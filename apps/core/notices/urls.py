from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import MyNoticeListView, NoticeViewSet

router = SimpleRouter()
router.register('notices', NoticeViewSet, basename='notice')

urlpatterns = [
    path('my/notices/', MyNoticeListView.as_view(), name='my_notices'),
] + router.urls
