# Shared helpers for the storefront backend
