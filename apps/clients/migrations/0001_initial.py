import django.db.models.deletion
import django.utils.timezone
import taggit.managers
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        ('taggit', '__first__'),
    ]

    operations = [
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="Client's full name", max_length=200)),
                ('email', models.EmailField(max_length=254)),
                ('phone', models.CharField(db_index=True, max_length=20)),
                ('document', models.CharField(blank=True, help_text='CPF/CNPJ', max_length=20, null=True)),
                ('client_type', models.CharField(choices=[('lead', 'Lead'), ('proprietario', 'Proprietário'), ('locatario', 'Locatário'), ('comprador', 'Comprador')], max_length=20)),
                ('stage', models.CharField(choices=[('novo', 'Novo lead'), ('qualificado', 'Qualificado'), ('visita_agendada', 'Visita agendada'), ('proposta', 'Proposta enviada'), ('fechado', 'Negócio fechado'), ('perdido', 'Perdido')], db_index=True, default='novo', max_length=20)),
                ('source', models.CharField(blank=True, help_text='Where did this lead come from?', max_length=100, null=True)),
                ('pipeline_value', models.DecimalField(blank=True, decimal_places=2, help_text='Estimated deal value', max_digits=12, null=True)),
                ('last_contact_at', models.DateTimeField(blank=True, null=True)),
                ('next_follow_up', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('address', models.TextField(blank=True, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(help_text='Which company owns this client', on_delete=django.db.models.deletion.CASCADE, related_name='clients', to='core.company')),
                ('tags', taggit.managers.TaggableManager(blank=True, help_text='A comma-separated list of tags.', through='taggit.TaggedItem', to='taggit.Tag', verbose_name='Tags')),
            ],
            options={
                'verbose_name': 'Client',
                'verbose_name_plural': 'Clients',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['company', 'stage'], name='client_company_stage_idx'),
                    models.Index(fields=['company', 'client_type'], name='client_company_type_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ClientInteraction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('interaction_type', models.CharField(choices=[('contato_telefonico', 'Contato telefônico'), ('whatsapp', 'WhatsApp'), ('email', 'E-mail'), ('visita', 'Visita presencial'), ('proposta', 'Envio de proposta'), ('assinatura', 'Assinatura de contrato')], max_length=30)),
                ('channel', models.CharField(blank=True, choices=[('telefone', 'Telefone'), ('whatsapp', 'WhatsApp'), ('email', 'E-mail'), ('presencial', 'Presencial')], max_length=20, null=True)),
                ('summary', models.TextField()),
                ('occurred_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('next_steps', models.TextField(blank=True, null=True)),
                ('next_follow_up', models.DateTimeField(blank=True, null=True)),
                ('stage', models.CharField(blank=True, choices=[('novo', 'Novo lead'), ('qualificado', 'Qualificado'), ('visita_agendada', 'Visita agendada'), ('proposta', 'Proposta enviada'), ('fechado', 'Negócio fechado'), ('perdido', 'Perdido')], help_text='Stage the client moved to with this interaction', max_length=20, null=True)),
                ('created_by', models.CharField(blank=True, max_length=200, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interactions', to='clients.client')),
            ],
            options={
                'verbose_name': 'Client interaction',
                'verbose_name_plural': 'Client interactions',
                'ordering': ['-occurred_at'],
                'indexes': [models.Index(fields=['client', '-occurred_at'], name='interaction_client_date_idx')],
            },
        ),
    ]
