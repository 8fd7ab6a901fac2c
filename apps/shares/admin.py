# ==========================================
# apps/shares/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import SharePurchase, PaymentMethod


@admin.register(SharePurchase)
class SharePurchaseAdmin(admin.ModelAdmin):
    """
    Admin interface for the share ledger.

    Rows are created only through the ledger writer (API or sample data),
    so adding is disabled here and the derived fields are read-only:
    - purchase_date / month stay consistent (see reconcile_share_months)
    - total_amount keeps the value accepted at write time
    """

    list_display = [
        'user',
        'quantity',
        'price_per_share',
        'total_amount',
        'payment_method_badge',
        'month',
        'purchase_date',
        'recorded_by',
    ]

    list_filter = [
        'payment_method',
        'month',
        'purchase_date',
    ]

    search_fields = [
        'user__email',
        'user__name',
        'recorded_by__email',
        'notes',
    ]

    readonly_fields = [
        'user',
        'quantity',
        'price_per_share',
        'total_amount',
        'purchase_date',
        'month',
        'recorded_by',
        'created_at',
    ]

    list_select_related = ['user', 'recorded_by']
    date_hierarchy = 'purchase_date'
    ordering = ['-purchase_date', '-created_at']

    fieldsets = (
        ('Purchase Information', {
            'fields': (
                'user',
                'recorded_by',
                'purchase_date',
                'month',
            )
        }),
        ('Financial Details', {
            'fields': (
                'quantity',
                'price_per_share',
                'total_amount',
                'payment_method',
            )
        }),
        ('Notes', {
            'fields': ('notes',),
            'classes': ('collapse',),
        }),
        ('Metadata', {
            'fields': ('created_at',),
            'classes': ('collapse',),
        }),
    )

    def payment_method_badge(self, obj):
        """Display payment method as colored badge."""
        colors = {
            PaymentMethod.PAYPAL: ('#003087', 'white'),
            PaymentMethod.BANK_TRANSFER: ('#6B8E5E', 'white'),
            PaymentMethod.SKRILL: ('#862165', 'white'),
            PaymentMethod.CASH: ('#E5C49A', '#2C1810'),
            PaymentMethod.CHECK: ('#A47449', 'white'),
        }
        bg, fg = colors.get(obj.payment_method, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_payment_method_display()
        )
    payment_method_badge.short_description = 'Payment'
    payment_method_badge.admin_order_field = 'payment_method'

    def has_add_permission(self, request):
        """Disable adding purchases manually - they're created by the ledger writer."""
        return False

    def has_delete_permission(self, request, obj=None):
        """The ledger is append-only."""
        return False
