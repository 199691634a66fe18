from django.contrib import admin
from django.utils.html import format_html

from .models import Construction, ConstructionExpense, ConstructionTask


class ConstructionTaskInline(admin.TabularInline):
    model = ConstructionTask
    extra = 0
    fields = ['order', 'name', 'status', 'priority', 'assigned_to', 'progress']


class ConstructionExpenseInline(admin.TabularInline):
    model = ConstructionExpense
    extra = 0
    fields = ['expense_date', 'description', 'category', 'amount', 'supplier']


@admin.register(Construction)
class ConstructionAdmin(admin.ModelAdmin):

    list_display = ['name', 'property', 'status', 'budget', 'spent', 'progress_bar', 'expected_end_date', 'company']
    list_filter = ['status', 'company']
    search_fields = ['name', 'property__title', 'contractor']
    list_select_related = ['property', 'company']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ConstructionTaskInline, ConstructionExpenseInline]

    def progress_bar(self, obj):
        return format_html(
            '<div style="width: 100px; background: #eee; border-radius: 3px;">'
            '<div style="width: {}%; background: #28a745; height: 10px; border-radius: 3px;"></div></div>',
            obj.progress
        )

    progress_bar.short_description = 'Progress'
