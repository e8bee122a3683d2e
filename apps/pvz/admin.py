from django.contrib import admin
from apps.pvz.models import PickupPoint, Reception, Product


class ReceptionInline(admin.TabularInline):
    """Inline admin for a pickup point's receptions."""
    model = Reception
    extra = 0
    fields = ['date_time', 'status']
    readonly_fields = ['date_time', 'status']
    ordering = ['-date_time']
    can_delete = False
    show_change_link = True


class ProductInline(admin.TabularInline):
    """Inline admin for the products of a reception, in intake order."""
    model = Product
    extra = 0
    fields = ['sequence', 'type', 'date_time']
    readonly_fields = ['sequence', 'type', 'date_time']
    can_delete = False


@admin.register(PickupPoint)
class PickupPointAdmin(admin.ModelAdmin):
    """Read-mostly admin for pickup points; edits go through the API."""

    list_display = ['id', 'city', 'registration_date', 'reception_count']
    list_filter = ['city', 'registration_date']
    search_fields = ['id']
    readonly_fields = ['id', 'registration_date', 'city']
    date_hierarchy = 'registration_date'
    ordering = ['-registration_date']
    inlines = [ReceptionInline]

    def reception_count(self, obj):
        """Show number of receptions."""
        return obj.receptions.count()
    reception_count.short_description = 'Receptions'

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Reception)
class ReceptionAdmin(admin.ModelAdmin):
    """Admin interface for receptions."""

    list_display = ['id', 'pickup_point', 'date_time', 'status', 'product_count']
    list_filter = ['status', 'date_time', 'pickup_point__city']
    search_fields = ['id', 'pickup_point__id']
    readonly_fields = ['id', 'pickup_point', 'date_time', 'status']
    date_hierarchy = 'date_time'
    ordering = ['-date_time']
    inlines = [ProductInline]

    def product_count(self, obj):
        """Show number of products."""
        return obj.products.count()
    product_count.short_description = 'Products'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
