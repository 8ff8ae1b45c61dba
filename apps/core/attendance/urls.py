from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import (
    CheckInCheckOutViewSet,
    CheckoutFinancialViewSet,
    CheckoutRuleViewSet,
    MyCheckInCheckOutListView,
    MyCheckInView,
    MyCheckoutView,
)

router = SimpleRouter()
router.register('checkout-rules', CheckoutRuleViewSet, basename='checkout-rule')
router.register('checkincheckouts', CheckInCheckOutViewSet, basename='checkincheckout')
router.register('checkout-financials', CheckoutFinancialViewSet, basename='checkout-financial')

urlpatterns = [
    path('my/checkout/', MyCheckoutView.as_view(), name='my_checkout'),
    path('my/checkin/', MyCheckInView.as_view(), name='my_checkin'),
    path('my/checkincheckouts/', MyCheckInCheckOutListView.as_view(), name='my_checkincheckouts'),
] + router.urls
