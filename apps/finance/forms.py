from django import forms

from apps.core.forms import ApiForm, DecimalInputField, OptionalReferenceField, non_negative

from .models import Transaction


class TransactionForm(ApiForm):
    renamed_fields = {'type': 'transaction_type'}
    not_null_fields = ('status',)

    type = forms.ChoiceField(choices=Transaction.TYPE_CHOICES)
    category = forms.CharField(max_length=50)
    description = forms.CharField(max_length=255)
    amount = DecimalInputField(max_digits=12, decimal_places=2, validators=[non_negative])
    due_date = forms.DateTimeField()
    paid_date = forms.DateTimeField(required=False)
    status = forms.ChoiceField(choices=Transaction.STATUS_CHOICES, required=False)
    contract_id = OptionalReferenceField()
