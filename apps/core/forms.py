from decimal import Decimal

from django import forms
from django.core.exceptions import ValidationError

from apps.core.exceptions import ValidationFailed


class ApiForm(forms.Form):
    """
    Base form for JSON payloads

    Only the fields present in the payload are returned by payload(), so
    model defaults apply to whatever the caller left out. With partial=True
    (PUT) required fields may be left out as well.
    """

    # Payload name → model field name (e.g. "type" → "property_type")
    renamed_fields = {}

    # Optional fields backed by a model default: may be omitted, never null
    not_null_fields = ()

    def __init__(self, data=None, *args, partial=False, **kwargs):
        super().__init__(data, *args, **kwargs)
        self.partial = partial

        if partial:
            for name, field in self.fields.items():
                if name not in self.data:
                    field.required = False

    def clean(self):
        cleaned_data = super().clean()
        for name in self.not_null_fields:
            if name in self.data and cleaned_data.get(name) in (None, '') and name not in self.errors:
                self.add_error(name, 'Este campo não pode ser nulo.')
        return cleaned_data

    def payload(self):
        """cleaned_data restricted to what the caller sent, keyed by model field"""
        data = {name: value for name, value in self.cleaned_data.items() if name in self.data}

        for field_name, model_field in self.renamed_fields.items():
            if field_name in data:
                data[model_field] = data.pop(field_name)
        return data

    def error_map(self):
        """{field: [messages]} for the JSON error response"""
        return {field: [str(message) for message in messages] for field, messages in self.errors.items()}


class DecimalInputField(forms.DecimalField):
    """Decimal accepting JSON numbers and the Brazilian comma separator ('1250,50')"""

    def to_python(self, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str):
            value = value.strip().replace(',', '.')
        return super().to_python(value)


class OptionalReferenceField(forms.IntegerField):
    """Foreign id where '' and null both mean "no link" """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('min_value', 1)
        super().__init__(*args, **kwargs)


class StringListField(forms.Field):
    """JSON array of strings (tags, image URLs)"""

    default_error_messages = {
        'invalid': 'Informe uma lista de textos.',
    }

    def __init__(self, *args, max_item_length=500, **kwargs):
        kwargs.setdefault('required', False)
        self.max_item_length = max_item_length
        super().__init__(*args, **kwargs)

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValidationError(self.error_messages['invalid'], code='invalid')

        items = []
        for item in value:
            if not isinstance(item, str):
                raise ValidationError(self.error_messages['invalid'], code='invalid')
            item = item.strip()
            if len(item) > self.max_item_length:
                raise ValidationError(f'Itens devem ter no máximo {self.max_item_length} caracteres.')
            if item and item not in items:
                items.append(item)
        return items


def non_negative(value):
    if value is not None and value < Decimal('0'):
        raise ValidationError('O valor não pode ser negativo.')


class CompanyForm(ApiForm):
    name = forms.CharField(max_length=200)
    document = forms.CharField(max_length=20)
    email = forms.EmailField()
    phone = forms.CharField(max_length=20, required=False, empty_value=None)
    address = forms.CharField(required=False, empty_value=None)


def optional_choice(choices):
    """Closed enumeration that may be omitted or null"""
    return forms.TypedChoiceField(choices=choices, required=False, empty_value=None)


def clean_payload(form_class, data, partial=False):
    """
    Validate a decoded JSON body with form_class

    Returns:
        dict of model field → value (only what the caller sent)

    Raises:
        ValidationFailed: with the form's field errors
    """
    form = form_class(data, partial=partial)
    if not form.is_valid():
        raise ValidationFailed(form.error_map())
    return form.payload()
