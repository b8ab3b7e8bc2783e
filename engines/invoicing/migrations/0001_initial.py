import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


def _money(**kwargs):
    return models.DecimalField(decimal_places=2, max_digits=14, **kwargs)


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("core_identity", "0001_initial"),
        ("stores", "0001_initial"),
        ("catalog", "0001_initial"),
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Invoice",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("invoice_number", models.CharField(max_length=32, unique=True)),
                ("subtotal", _money(default=Decimal("0.00"))),
                (
                    "discount_percent",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=5,
                        null=True,
                    ),
                ),
                ("discount_amount", _money(default=Decimal("0.00"))),
                ("gst_amount", _money(default=Decimal("0.00"))),
                ("total_amount", _money(default=Decimal("0.00"))),
                ("paid_amount", _money(default=Decimal("0.00"))),
                ("balance_amount", _money(default=Decimal("0.00"))),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("unpaid", "Unpaid"),
                            ("partial", "Partially paid"),
                            ("paid", "Paid"),
                        ],
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("due_date", models.DateField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("issued_at", models.DateTimeField()),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="core_identity.user",
                    ),
                ),
                (
                    "order",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoice",
                        to="orders.order",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoices",
                        to="stores.store",
                    ),
                ),
            ],
            options={
                "db_table": "erp_invoices",
                "ordering": ["-issued_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["status", "issued_at"],
                        name="idx_invoice_status_issued",
                    ),
                    models.Index(
                        fields=["store", "issued_at"],
                        name="idx_invoice_store_issued",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="InvoiceItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("quantity", models.PositiveIntegerField()),
                ("list_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "discount_percent",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=5,
                    ),
                ),
                ("discount_amount", _money(default=Decimal("0.00"))),
                ("gst_percent", models.DecimalField(decimal_places=2, max_digits=5)),
                ("gst_amount", _money(default=Decimal("0.00"))),
                ("total", _money()),
                (
                    "invoice",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="invoicing.invoice",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "db_table": "erp_invoice_items",
                "ordering": ["invoice", "id"],
            },
        ),
    ]
