import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('core', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Activity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('activity_type', models.CharField(choices=[('property_created', 'Property created'), ('lead_created', 'Lead created'), ('interaction_recorded', 'Interaction recorded'), ('appointment_created', 'Appointment created'), ('appointment_updated', 'Appointment updated'), ('appointment_deleted', 'Appointment deleted'), ('contract_signed', 'Contract signed'), ('transaction_created', 'Transaction created'), ('construction_created', 'Construction created')], help_text='Type of activity/action', max_length=30)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, help_text='Human-readable description of what happened', null=True)),
                ('entity_type', models.CharField(blank=True, max_length=30, null=True)),
                ('entity_id', models.BigIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activities', to='core.company')),
                ('user', models.ForeignKey(blank=True, help_text='Who performed this action', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='activities', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Activity',
                'verbose_name_plural': 'Activities',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['company', '-created_at'], name='activity_company_created_idx')],
            },
        ),
    ]
