from django import forms

from apps.core.forms import ApiForm, DecimalInputField, non_negative

from .models import Construction, ConstructionExpense, ConstructionTask


class ConstructionForm(ApiForm):
    not_null_fields = ('status', 'progress', 'spent')

    name = forms.CharField(max_length=200)
    description = forms.CharField(required=False, empty_value=None)
    property_id = forms.IntegerField(min_value=1)
    status = forms.ChoiceField(choices=Construction.STATUS_CHOICES, required=False)
    budget = DecimalInputField(max_digits=12, decimal_places=2, required=False, validators=[non_negative])
    spent = DecimalInputField(max_digits=12, decimal_places=2, required=False, validators=[non_negative])
    start_date = forms.DateTimeField(required=False)
    end_date = forms.DateTimeField(required=False)
    expected_end_date = forms.DateTimeField(required=False)
    progress = forms.IntegerField(min_value=0, max_value=100, required=False)
    contractor = forms.CharField(max_length=200, required=False, empty_value=None)
    contractor_contact = forms.CharField(max_length=200, required=False, empty_value=None)
    notes = forms.CharField(required=False, empty_value=None)


class TaskForm(ApiForm):
    not_null_fields = ('status', 'priority', 'progress', 'order')

    name = forms.CharField(max_length=200)
    description = forms.CharField(required=False, empty_value=None)
    status = forms.ChoiceField(choices=ConstructionTask.STATUS_CHOICES, required=False)
    priority = forms.ChoiceField(choices=ConstructionTask.PRIORITY_CHOICES, required=False)
    start_date = forms.DateTimeField(required=False)
    end_date = forms.DateTimeField(required=False)
    assigned_to = forms.CharField(max_length=200, required=False, empty_value=None)
    estimated_cost = DecimalInputField(max_digits=12, decimal_places=2, required=False, validators=[non_negative])
    actual_cost = DecimalInputField(max_digits=12, decimal_places=2, required=False, validators=[non_negative])
    progress = forms.IntegerField(min_value=0, max_value=100, required=False)
    order = forms.IntegerField(min_value=0, required=False)


class ExpenseForm(ApiForm):
    not_null_fields = ('category',)

    description = forms.CharField(max_length=255)
    category = forms.ChoiceField(choices=ConstructionExpense.CATEGORY_CHOICES, required=False)
    amount = DecimalInputField(max_digits=12, decimal_places=2, validators=[non_negative])
    expense_date = forms.DateTimeField()
    supplier = forms.CharField(max_length=200, required=False, empty_value=None)
    receipt = forms.CharField(max_length=500, required=False, empty_value=None)
    notes = forms.CharField(required=False, empty_value=None)
