from django.contrib import admin
from django.utils.html import format_html

from utils.logging_utils import mask_value

from .models import License, Order, OrderItem, Product, ProductFeedback, ProductSku


class ProductSkuInline(admin.TabularInline):
    model = ProductSku
    extra = 0
    fields = ('sku_name', 'price', 'validity', 'lifetime', 'stripe_price_id', 'sku_code')
    readonly_fields = ('stripe_price_id', 'sku_code')


class ProductFeedbackInline(admin.TabularInline):
    model = ProductFeedback
    extra = 0
    fields = ('customer', 'customer_name', 'rating', 'feedback_msg', 'created_at')
    readonly_fields = ('customer', 'customer_name', 'rating', 'feedback_msg', 'created_at')


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('product_name', 'category', 'platform_type', 'base_type',
                    'avg_rating', 'stripe_sync_pending', 'created_at')
    list_filter = ('category', 'platform_type', 'base_type', 'stripe_sync_pending', 'created_at')
    search_fields = ('product_name', 'description', 'stripe_product_id')
    readonly_fields = ('id', 'avg_rating', 'image_preview', 'image_details',
                       'stripe_product_id', 'stripe_sync_pending', 'created_at', 'updated_at')

    inlines = [ProductSkuInline, ProductFeedbackInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'product_name', 'description', 'category', 'platform_type', 'base_type')
        }),
        ('Links', {
            'fields': ('product_url', 'download_url')
        }),
        ('Details', {
            'fields': ('requirement_specification', 'highlights', 'avg_rating')
        }),
        ('Image', {
            'fields': ('image', 'image_preview', 'image_details'),
            'classes': ('collapse',)
        }),
        ('Payment Ledger', {
            'fields': ('stripe_product_id', 'stripe_sync_pending')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )

    def image_preview(self, obj):
        if obj.image:
            return format_html('<img src="{}" width="100" height="105" />', obj.image)
        return "No Image"
    image_preview.short_description = "Preview"


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    list_display = ('masked_key', 'product', 'product_sku', 'is_sold', 'order_id', 'created_at')
    list_filter = ('is_sold', 'created_at')
    search_fields = ('product__product_name', 'product_sku__sku_name', 'order_id')
    readonly_fields = ('created_at', 'updated_at')

    def masked_key(self, obj):
        return mask_value(obj.license_key)
    masked_key.short_description = "License Key"


@admin.register(ProductFeedback)
class ProductFeedbackAdmin(admin.ModelAdmin):
    list_display = ('product', 'customer', 'rating', 'created_at')
    list_filter = ('rating', 'created_at')
    search_fields = ('product__product_name', 'customer__username', 'feedback_msg')
    readonly_fields = ('created_at',)


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ('product', 'sku', 'product_name', 'quantity', 'price', 'lifetime')
    readonly_fields = ('product_name',)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'customer', 'order_status', 'payment_status', 'total_amount', 'created_at')
    list_filter = ('order_status', 'payment_status', 'created_at')
    search_fields = ('id', 'customer__username', 'customer_email', 'checkout_session_id')
    readonly_fields = ('id', 'created_at', 'updated_at')
    inlines = [OrderItemInline]
