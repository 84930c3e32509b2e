from prometheus_client import Counter, Gauge, Histogram


# Order Metrics
orders_placed_total = Counter("marketplace_orders_placed_total", "Total orders placed", ["shipping_method"])
order_value = Histogram(
    "marketplace_order_value",
    "Order value distribution",
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, float("inf")],
)
checkout_failures_total = Counter("marketplace_checkout_failures_total", "Rejected checkouts", ["reason"])

# Payment Metrics
payments_processed_total = Counter(
    "marketplace_payments_processed_total", "Payment attempts", ["payment_method", "outcome"]
)

# Shipping Metrics
shipments_created_total = Counter("marketplace_shipments_created_total", "Shipments created", ["courier"])

# Stock Metrics
stock_low_alert = Gauge("marketplace_stock_low_alert", "Products with low stock")

# Performance Metrics
checkout_duration = Histogram("marketplace_checkout_seconds", "Checkout transaction time")
