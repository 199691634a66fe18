from django import forms

from apps.core.forms import ApiForm, DecimalInputField, non_negative

from .models import Contract


class ContractForm(ApiForm):
    renamed_fields = {'type': 'contract_type'}
    not_null_fields = ('status',)

    type = forms.ChoiceField(choices=Contract.TYPE_CHOICES)
    property_id = forms.IntegerField(min_value=1)
    client_id = forms.IntegerField(min_value=1)
    value = DecimalInputField(max_digits=12, decimal_places=2, validators=[non_negative])
    start_date = forms.DateTimeField()
    end_date = forms.DateTimeField(required=False)
    status = forms.ChoiceField(choices=Contract.STATUS_CHOICES, required=False)
    terms = forms.CharField(required=False, empty_value=None)
    commission = DecimalInputField(max_digits=5, decimal_places=2, required=False, validators=[non_negative])

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')

        if start_date and end_date and end_date < start_date:
            self.add_error('end_date', 'A data final não pode ser anterior à data inicial.')

        return cleaned_data
