"""
Initial migration for RetailFlow models.
"""

from decimal import Decimal
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create RetailFlow models."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Store',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('location', models.CharField(blank=True, default='', max_length=255, verbose_name='Address')),
                ('is_central', models.BooleanField(default=False, help_text='Stock is distributed to branches from this store.', verbose_name='Central hub')),
                ('is_deleted', models.BooleanField(db_index=True, default=False, verbose_name='Deleted')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Store',
                'verbose_name_plural': 'Stores',
                'ordering': ['name'],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('is_central', True)), fields=('is_central',), name='unique_central_hub'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Supplier',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('contact_name', models.CharField(blank=True, default='', max_length=200, verbose_name='Contact')),
                ('phone', models.CharField(blank=True, default='', max_length=50, verbose_name='Phone')),
                ('email', models.EmailField(blank=True, default='', max_length=254, verbose_name='Email')),
                ('address', models.CharField(blank=True, default='', max_length=255, verbose_name='Address')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Notes')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Supplier',
                'verbose_name_plural': 'Suppliers',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('unit', models.CharField(choices=[('pcs', 'Pieces'), ('kg', 'Kilograms'), ('lb', 'Pounds'), ('box', 'Boxes'), ('pack', 'Packs'), ('liter', 'Liters'), ('meter', 'Meters')], default='pcs', max_length=10, verbose_name='Unit')),
                ('cost_price', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Cost price')),
                ('selling_price', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Selling price')),
                ('min_stock_level', models.DecimalField(decimal_places=3, default=Decimal('5'), help_text='Low stock alert fires at or below this quantity', max_digits=12, verbose_name='Minimum stock')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('supplier', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products', to='retailflow.supplier', verbose_name='Supplier')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='StockEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, verbose_name='Quantity')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_entries', to='retailflow.product', verbose_name='Product')),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_entries', to='retailflow.store', verbose_name='Store')),
            ],
            options={
                'verbose_name': 'Stock entry',
                'verbose_name_plural': 'Stock entries',
                'indexes': [models.Index(fields=['store', 'product'], name='stockentry_store_product_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('product', 'store'), name='unique_stock_coordinate'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockMove',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('delta', models.DecimalField(decimal_places=3, help_text='Positive = in, Negative = out', max_digits=12, verbose_name='Delta')),
                ('reason', models.CharField(help_text='Required. E.g. "Assignment", "Hub correction"', max_length=255, verbose_name='Reason')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Timestamp')),
                ('entry', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='moves', to='retailflow.stockentry', verbose_name='Stock entry')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Stock move',
                'verbose_name_plural': 'Stock moves',
                'ordering': ['timestamp'],
                'indexes': [models.Index(fields=['entry', 'timestamp'], name='stockmove_entry_ts_idx')],
            },
        ),
        migrations.CreateModel(
            name='Transfer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate, verbose_name='Date')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Quantity')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transfers', to='retailflow.product', verbose_name='Product')),
                ('from_store', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transfers_out', to='retailflow.store', verbose_name='From')),
                ('to_store', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transfers_in', to='retailflow.store', verbose_name='To')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Transfer',
                'verbose_name_plural': 'Transfers',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['to_store', 'date'], name='transfer_dest_date_idx'),
                    models.Index(fields=['product', 'date'], name='transfer_product_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ProductRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate, verbose_name='Date')),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('APPROVED', 'Approved'), ('REJECTED', 'Rejected')], db_index=True, default='PENDING', max_length=20, verbose_name='Status')),
                ('items', models.JSONField(blank=True, default=list, help_text='List of {description, quantity, unit}', verbose_name='Items')),
                ('receipt_image', models.TextField(blank=True, default='', verbose_name='Image')),
                ('note', models.TextField(blank=True, default='', verbose_name='Note')),
                ('reviewed_at', models.DateTimeField(blank=True, null=True, verbose_name='Reviewed at')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='requests', to='retailflow.store', verbose_name='Store')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('reviewed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Product request',
                'verbose_name_plural': 'Product requests',
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['store', 'status'], name='request_store_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='StaffProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('ADMIN', 'Administrator'), ('STORE_MANAGER', 'Store manager')], default='STORE_MANAGER', max_length=20, verbose_name='Role')),
                ('assigned_store', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='staff', to='retailflow.store', verbose_name='Assigned store')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='staff_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Staff profile',
                'verbose_name_plural': 'Staff profiles',
            },
        ),
        migrations.CreateModel(
            name='Sale',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate, verbose_name='Date')),
                ('amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Amount')),
                ('morning_shift', models.JSONField(blank=True, default=dict, verbose_name='Morning shift')),
                ('afternoon_shift', models.JSONField(blank=True, default=dict, verbose_name='Afternoon shift')),
                ('receipt_image', models.TextField(blank=True, default='', verbose_name='Receipt')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sales', to='retailflow.store', verbose_name='Store')),
            ],
            options={
                'verbose_name': 'Sale',
                'verbose_name_plural': 'Sales',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['store', 'date'], name='sale_store_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='Purchase',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate, verbose_name='Date')),
                ('supplier', models.CharField(blank=True, default='', max_length=200, verbose_name='Supplier')),
                ('items', models.JSONField(blank=True, default=list, help_text='List of {description, quantity, unit, cost}', verbose_name='Items')),
                ('receipt_image', models.TextField(blank=True, default='', verbose_name='Receipt')),
                ('total_cost', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Total cost')),
                ('is_quick_entry', models.BooleanField(default=False, verbose_name='Quick entry')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='retailflow.store', verbose_name='Store')),
            ],
            options={
                'verbose_name': 'Purchase',
                'verbose_name_plural': 'Purchases',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['store', 'date'], name='purchase_store_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate, verbose_name='Date')),
                ('category', models.CharField(choices=[('Rent', 'Rent'), ('Utilities', 'Utilities'), ('Staff', 'Staff'), ('Transport', 'Transport'), ('Misc', 'Misc')], default='Misc', max_length=20, verbose_name='Category')),
                ('description', models.CharField(blank=True, default='', max_length=255, verbose_name='Description')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='Amount')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='expenses', to='retailflow.store', verbose_name='Store')),
            ],
            options={
                'verbose_name': 'Expense',
                'verbose_name_plural': 'Expenses',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['store', 'date'], name='expense_store_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='WastageReport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate, verbose_name='Date')),
                ('responsible', models.CharField(blank=True, default='', max_length=200, verbose_name='Responsible')),
                ('total_wastage', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Total wastage')),
                ('receipt_image', models.TextField(blank=True, default='', verbose_name='Receipt')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='wastage_reports', to='retailflow.store', verbose_name='Store')),
            ],
            options={
                'verbose_name': 'Wastage report',
                'verbose_name_plural': 'Wastage reports',
                'ordering': ['-date'],
            },
        ),
        migrations.CreateModel(
            name='WastageItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('time', models.CharField(blank=True, default='', max_length=10, verbose_name='Time')),
                ('product_name', models.CharField(max_length=200, verbose_name='Product name')),
                ('reason', models.CharField(blank=True, default='', max_length=255, verbose_name='Reason')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Quantity')),
                ('unit', models.CharField(choices=[('pcs', 'Pieces'), ('kg', 'Kilograms'), ('lb', 'Pounds'), ('box', 'Boxes'), ('pack', 'Packs'), ('liter', 'Liters'), ('meter', 'Meters')], default='pcs', max_length=10, verbose_name='Unit')),
                ('unit_price', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Unit price')),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name='Total')),
                ('product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='retailflow.product', verbose_name='Product')),
                ('report', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='retailflow.wastagereport')),
            ],
            options={
                'verbose_name': 'Wastage item',
                'verbose_name_plural': 'Wastage items',
            },
        ),
    ]
