from django import forms

from apps.core.forms import ApiForm, DecimalInputField, StringListField, optional_choice

from .models import Client, ClientInteraction


class ClientForm(ApiForm):
    renamed_fields = {'type': 'client_type'}
    not_null_fields = ('stage',)

    name = forms.CharField(max_length=200)
    email = forms.EmailField()
    phone = forms.CharField(max_length=20)
    document = forms.CharField(max_length=20, required=False, empty_value=None)
    type = forms.ChoiceField(choices=Client.TYPE_CHOICES)
    stage = forms.ChoiceField(choices=Client.STAGE_CHOICES, required=False)
    source = forms.CharField(max_length=100, required=False, empty_value=None)
    tags = StringListField(max_item_length=100)
    pipeline_value = DecimalInputField(max_digits=12, decimal_places=2, required=False)
    address = forms.CharField(required=False, empty_value=None)
    notes = forms.CharField(required=False, empty_value=None)
    next_follow_up = forms.DateTimeField(required=False)

    def clean_email(self):
        return self.cleaned_data.get('email', '').strip().lower()


class InteractionForm(ApiForm):
    renamed_fields = {'type': 'interaction_type'}

    type = forms.ChoiceField(choices=ClientInteraction.TYPE_CHOICES)
    channel = optional_choice(ClientInteraction.CHANNEL_CHOICES)
    summary = forms.CharField()
    occurred_at = forms.DateTimeField(required=False)
    next_steps = forms.CharField(required=False, empty_value=None)
    next_follow_up = forms.DateTimeField(required=False)
    stage = optional_choice(Client.STAGE_CHOICES)
    created_by = forms.CharField(max_length=200, required=False, empty_value=None)
