# Marketplace views, split by sub-domain
from marketplace.cart.api.views import CartViewSet
from marketplace.catalog.api.views import CategoryViewSet, ProductViewSet
from marketplace.ordering.api.views import OrderViewSet
from marketplace.reporting.api.views import ReportViewSet
from marketplace.shipping.api.views import ShipmentViewSet


__all__ = [
    "CartViewSet",
    "CategoryViewSet",
    "OrderViewSet",
    "ProductViewSet",
    "ReportViewSet",
    "ShipmentViewSet",
]
