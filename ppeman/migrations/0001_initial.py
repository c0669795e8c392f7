"""
Initial migration for Ppeman models.
"""

import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Ppeman models: Station, PPEItem, InventoryRecord, InventoryAlert, AuditEntry, NotificationRecipient."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Station',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('location', models.CharField(max_length=255, verbose_name='Location')),
                ('description', models.TextField(blank=True, default='', verbose_name='Description')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Station',
                'verbose_name_plural': 'Stations',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='PPEItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('category', models.CharField(help_text='E.g. gloves, eye protection, respiratory', max_length=50, verbose_name='Category')),
                ('description', models.TextField(blank=True, default='', verbose_name='Description')),
                ('min_threshold', models.PositiveIntegerField(default=10, verbose_name='Default minimum threshold')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'PPE Item',
                'verbose_name_plural': 'PPE Items',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='NotificationRecipient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('email', models.EmailField(max_length=254, unique=True, verbose_name='Email')),
                ('receives_stock_alerts', models.BooleanField(default=True, verbose_name='Receives stock alerts')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Notification recipient',
                'verbose_name_plural': 'Notification recipients',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='AuditEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('user_id', models.CharField(max_length=150, verbose_name='User')),
                ('action', models.CharField(db_index=True, max_length=50, verbose_name='Action')),
                ('resource_type', models.CharField(max_length=50, verbose_name='Resource type')),
                ('resource_id', models.CharField(blank=True, default='', max_length=100, verbose_name='Resource ID')),
                ('old_values', models.JSONField(blank=True, null=True, verbose_name='Old values')),
                ('new_values', models.JSONField(blank=True, null=True, verbose_name='New values')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadata')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Timestamp')),
            ],
            options={
                'verbose_name': 'Audit entry',
                'verbose_name_plural': 'Audit entries',
                'db_table': 'audit_trail',
                'ordering': ['timestamp'],
                'indexes': [
                    models.Index(fields=['resource_type', 'resource_id'], name='audit_resource_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='InventoryRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('current_stock', models.PositiveIntegerField(default=0, verbose_name='Current stock')),
                ('min_threshold', models.PositiveIntegerField(default=10, help_text='LOW alert when stock is at or below this value', verbose_name='Minimum threshold')),
                ('critical_threshold', models.PositiveIntegerField(default=5, help_text='CRITICAL alert when stock is at or below this value', verbose_name='Critical threshold')),
                ('max_capacity', models.PositiveIntegerField(default=100, verbose_name='Max capacity')),
                ('last_restocked', models.DateTimeField(blank=True, null=True, verbose_name='Last restocked')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='inventory', to='ppeman.ppeitem', verbose_name='PPE Item')),
                ('station', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='inventory', to='ppeman.station', verbose_name='Station')),
            ],
            options={
                'verbose_name': 'Inventory record',
                'verbose_name_plural': 'Inventory records',
                'db_table': 'station_inventory',
                'indexes': [
                    models.Index(fields=['station', 'current_stock'], name='station_inv_stock_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('station', 'item'), name='unique_inventory_per_station_item'),
                ],
            },
        ),
        migrations.CreateModel(
            name='InventoryAlert',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('alert_type', models.CharField(choices=[('LOW_STOCK', 'Low stock'), ('CRITICAL_LOW', 'Critically low')], max_length=20, verbose_name='Alert type')),
                ('severity', models.CharField(choices=[('WARNING', 'Warning'), ('CRITICAL', 'Critical')], max_length=20, verbose_name='Severity')),
                ('threshold_value', models.PositiveIntegerField(verbose_name='Threshold crossed')),
                ('current_stock', models.PositiveIntegerField(verbose_name='Stock at creation')),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('ACKNOWLEDGED', 'Acknowledged'), ('RESOLVED', 'Resolved')], db_index=True, default='ACTIVE', max_length=20, verbose_name='Status')),
                ('alert_sent', models.BooleanField(default=False, verbose_name='Notification sent')),
                ('acknowledged_by', models.CharField(blank=True, max_length=150, null=True, verbose_name='Acknowledged by')),
                ('acknowledged_at', models.DateTimeField(blank=True, null=True, verbose_name='Acknowledged at')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='alerts', to='ppeman.ppeitem', verbose_name='PPE Item')),
                ('station', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='alerts', to='ppeman.station', verbose_name='Station')),
            ],
            options={
                'verbose_name': 'Inventory alert',
                'verbose_name_plural': 'Inventory alerts',
                'db_table': 'inventory_alerts',
                'indexes': [
                    models.Index(fields=['station', 'item', 'status'], name='inv_alert_pair_status_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(
                        condition=models.Q(('status', 'ACTIVE')),
                        fields=('station', 'item', 'alert_type'),
                        name='unique_active_alert_per_condition',
                    ),
                ],
            },
        ),
    ]
