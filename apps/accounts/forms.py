from django import forms

from apps.core.forms import ApiForm


# LOGIN FORM
class LoginForm(ApiForm):
    email = forms.EmailField(max_length=255)
    password = forms.CharField(strip=False)

    def clean_email(self):
        email = self.cleaned_data.get('email', '')
        return email.lower().strip()
