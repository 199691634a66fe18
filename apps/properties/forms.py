from django import forms

from apps.core.forms import ApiForm, DecimalInputField, StringListField, non_negative

from .models import Property


class PropertyForm(ApiForm):
    renamed_fields = {'type': 'property_type'}
    not_null_fields = ('status',)

    title = forms.CharField(max_length=200)
    description = forms.CharField(required=False, empty_value=None)
    type = forms.ChoiceField(choices=Property.TYPE_CHOICES)
    status = forms.ChoiceField(choices=Property.STATUS_CHOICES, required=False)

    price = DecimalInputField(max_digits=12, decimal_places=2, validators=[non_negative])
    area = DecimalInputField(max_digits=8, decimal_places=2, required=False, validators=[non_negative])
    bedrooms = forms.IntegerField(min_value=0, required=False)
    bathrooms = forms.IntegerField(min_value=0, required=False)
    parking_spaces = forms.IntegerField(min_value=0, required=False)

    address = forms.CharField(max_length=255)
    neighborhood = forms.CharField(max_length=100)
    city = forms.CharField(max_length=100)
    state = forms.CharField(max_length=2, min_length=2)
    zip_code = forms.CharField(max_length=10)

    images = StringListField()

    def clean_state(self):
        return self.cleaned_data.get('state', '').upper()
