from django.contrib import admin

from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):

    list_display = ['description', 'transaction_type', 'category', 'amount', 'due_date', 'paid_date', 'status', 'company']
    list_filter = ['transaction_type', 'status', 'category', 'company']
    search_fields = ['description', 'category']
    list_select_related = ['contract', 'company']
    date_hierarchy = 'due_date'
    readonly_fields = ['created_at']
