from rest_framework.routers import SimpleRouter

from .views import BlockViewSet, HostelViewSet, RoomViewSet

router = SimpleRouter()
router.register('hostels', HostelViewSet, basename='hostel')
router.register('blocks', BlockViewSet, basename='block')
router.register('rooms', RoomViewSet, basename='room')

urlpatterns = router.urls
