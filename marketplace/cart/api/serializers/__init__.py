from .cart_serializers import CartItemSerializer, CartServiceOutputSerializer


__all__ = ["CartItemSerializer", "CartServiceOutputSerializer"]
