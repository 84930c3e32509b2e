from django.contrib import admin

from .models import CartItem, Category, Order, OrderItem, Product, Shipment


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'product_count', 'created_at')
    search_fields = ('name', 'description')
    readonly_fields = ('created_at', 'updated_at', 'product_count')

    def product_count(self, obj):
        return obj.products.count()
    product_count.short_description = "Products"


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'category', 'price', 'stock', 'created_at')
    list_filter = ('category', 'created_at')
    search_fields = ('name', 'code', 'description')
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('name', 'code', 'description', 'category')
        }),
        ('Pricing & Inventory', {
            'fields': ('price', 'stock')
        }),
        ('Media', {
            'fields': ('image',),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('category')


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ('user', 'product', 'quantity', 'created_at')
    search_fields = ('user__email', 'product__name', 'product__code')
    raw_id_fields = ('user', 'product')


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ('product', 'quantity', 'price')
    readonly_fields = ('product', 'quantity', 'price')


class ShipmentInline(admin.TabularInline):
    model = Shipment
    extra = 0
    fields = ('courier', 'tracking_number', 'cost', 'status', 'estimated_delivery', 'delivered_at')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'status', 'payment_status', 'total_amount',
                    'item_count', 'created_at')
    list_filter = ('status', 'payment_status', 'shipping_method', 'created_at')
    search_fields = ('id', 'user__email', 'user__name', 'transaction_id')
    readonly_fields = ('created_at', 'updated_at', 'transaction_id')
    inlines = [OrderItemInline, ShipmentInline]
    actions = ['mark_cancelled']

    fieldsets = (
        (None, {
            'fields': ('user', 'status', 'total_amount')
        }),
        ('Shipping', {
            'fields': ('shipping_address', 'shipping_method', 'shipping_cost')
        }),
        ('Payment', {
            'fields': ('payment_method', 'payment_status', 'transaction_id')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def item_count(self, obj):
        return obj.items.count()
    item_count.short_description = "Items"

    def mark_cancelled(self, request, queryset):
        updated = queryset.update(status=Order.STATUS_CANCELLED)
        self.message_user(request, f"{updated} orders marked as cancelled.")
    mark_cancelled.short_description = "Mark selected orders as cancelled"


@admin.register(Shipment)
class ShipmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'order', 'courier', 'tracking_number', 'status', 'cost', 'created_at')
    list_filter = ('status', 'courier')
    search_fields = ('tracking_number', 'order__id')
    raw_id_fields = ('order',)
