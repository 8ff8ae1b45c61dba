from rest_framework.routers import SimpleRouter

from .views import InquirySeaterViewSet, InquiryViewSet

router = SimpleRouter()
router.register('inquiries', InquiryViewSet, basename='inquiry')
router.register('inquiry-seaters', InquirySeaterViewSet, basename='inquiry-seater')

urlpatterns = router.urls
