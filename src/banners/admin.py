from django.contrib import admin, messages

from . import lifecycle
from .exceptions import BookingError
from .models import Country, Region, Zone, BannerBooking, BannerFallback, BannerEvent, BannerPayment


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'slug', 'flag_emoji')
    search_fields = ('name', 'slug')
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Region)
class RegionAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'country', 'slug')
    list_filter = ('country',)
    search_fields = ('name', 'slug', 'country__name')
    list_select_related = ('country',)


@admin.register(Zone)
class ZoneAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'zone_type', 'country', 'region', 'is_active', 'created_at')
    list_filter = ('zone_type', 'is_active', 'country')
    search_fields = ('name', 'country__name', 'region__name')
    autocomplete_fields = ('country', 'region')
    readonly_fields = ('created_at', 'updated_at')
    list_select_related = ('country', 'region')


def _run_for_each(request, qs, operation, verb, noun="booking"):
    done = 0
    for pk in qs.values_list('pk', flat=True):
        try:
            operation(pk)
            done += 1
        except BookingError as e:
            messages.warning(request, f"{noun.capitalize()} #{pk}: {e.detail}")
    if done:
        messages.success(request, f"{done} {noun}(s) {verb}.")


@admin.action(description="Approve selected bookings")
def approve_bookings(modeladmin, request, qs):
    _run_for_each(request, qs, lambda pk: lifecycle.approve_booking(pk, request.user), "approved")


@admin.action(description="Reject selected bookings")
def reject_bookings(modeladmin, request, qs):
    _run_for_each(request, qs, lambda pk: lifecycle.reject_booking(pk, request.user), "rejected")


@admin.action(description="Cancel selected bookings")
def cancel_bookings(modeladmin, request, qs):
    _run_for_each(request, qs, lambda pk: lifecycle.cancel_booking(pk, request.user), "cancelled")


@admin.register(BannerBooking)
class BannerBookingAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'zone', 'position', 'format', 'requester_email',
        'status', 'start_date', 'end_date', 'price_usd', 'created_at'
    )

    # Filter/search for moderation
    list_filter = (
        'status',
        'position',
        'zone__zone_type',
        'start_date',
        'created_at',
    )
    date_hierarchy = 'start_date'
    search_fields = ('zone__name', 'requested_by__email', 'requested_by__username', 'image_url')
    autocomplete_fields = ('zone', 'requested_by')
    ordering = ('-created_at',)
    list_select_related = ('zone', 'requested_by')
    actions = (approve_bookings, reject_bookings, cancel_bookings)

    # Dates, price and status only change through the moderation actions
    readonly_fields = (
        'status', 'price_usd', 'duration_days', 'end_date',
        'reviewed_by', 'reviewed_at', 'created_at', 'updated_at',
    )

    @admin.display(ordering='requested_by__email', description='Requester')
    def requester_email(self, obj):
        requester = getattr(obj, 'requested_by', None)
        return getattr(requester, 'email', None)


@admin.register(BannerFallback)
class BannerFallbackAdmin(admin.ModelAdmin):
    list_display = ('id', 'label', 'zone', 'position', 'format', 'priority', 'is_active')
    list_filter = ('is_active', 'position', 'format')
    search_fields = ('label', 'zone__name')
    autocomplete_fields = ('zone',)
    ordering = ('-priority',)


@admin.register(BannerEvent)
class BannerEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'event_type', 'booking', 'fallback', 'zone', 'position', 'anon_ip_hash', 'created_at')
    list_filter = ('event_type', 'position', 'created_at')
    search_fields = ('anon_ip_hash',)
    readonly_fields = [f.name for f in BannerEvent._meta.fields]
    list_select_related = ('booking', 'fallback', 'zone')


@admin.action(description="Confirm selected payments")
def confirm_payments(modeladmin, request, qs):
    _run_for_each(request, qs, lambda pk: lifecycle.confirm_payment(pk, request.user), "confirmed", "payment")


@admin.register(BannerPayment)
class BannerPaymentAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'reference_code', 'booking', 'payer', 'amount_usd',
        'payment_method', 'status', 'invoice_number', 'created_at',
    )
    list_filter = ('status', 'payment_method', 'created_at')
    search_fields = ('reference_code', 'invoice_number', 'payer__email', 'payer__username')
    list_select_related = ('booking', 'payer')
    ordering = ('-created_at',)
    actions = (confirm_payments,)

    # Rejections need a reason, use the API for those
    readonly_fields = (
        'booking', 'payer', 'amount_usd', 'status', 'reference_code', 'invoice_number',
        'submitted_at', 'reviewed_by', 'reviewed_at', 'rejection_reason', 'created_at', 'updated_at',
    )
