from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api.views import prometheus_metrics
from .views import CartViewSet, CategoryViewSet, OrderViewSet, ProductViewSet, ReportViewSet, ShipmentViewSet

# Create the main router
router = DefaultRouter()
router.register(r"categories", CategoryViewSet, basename="category")
router.register(r"products", ProductViewSet, basename="product")
router.register(r"cart", CartViewSet, basename="cart")
router.register(r"orders", OrderViewSet, basename="order")
router.register(r"shipments", ShipmentViewSet, basename="shipment")
router.register(r"reports", ReportViewSet, basename="report")

app_name = "marketplace"

urlpatterns = [
    # Prometheus metrics endpoint
    path("metrics/", prometheus_metrics.marketplace_prometheus_metrics, name="marketplace-metrics"),
    # Main API routes
    path("", include(router.urls)),
]
