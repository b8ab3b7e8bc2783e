import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


def _uuid_pk():
    return (
        "id",
        models.UUIDField(
            default=uuid.uuid4,
            editable=False,
            primary_key=True,
            serialize=False,
        ),
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("core_identity", "0001_initial"),
        ("inventory", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Vendor",
            fields=[
                _uuid_pk(),
                ("name", models.CharField(max_length=200)),
                ("phone", models.CharField(max_length=32)),
                ("gst_number", models.CharField(blank=True, default="", max_length=32)),
                ("address", models.TextField(blank=True, default="")),
                ("email", models.CharField(blank=True, default="", max_length=254)),
                ("billing_cycle_days", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"db_table": "erp_vendors", "ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="PurchaseOrder",
            fields=[
                _uuid_pk(),
                ("order_number", models.CharField(max_length=32, unique=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("reached_office", "Reached office"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
                ("reached_office_at", models.DateTimeField(blank=True, null=True)),
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
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchase_orders",
                        to="procurement.vendor",
                    ),
                ),
            ],
            options={"db_table": "erp_purchase_orders", "ordering": ["-created_at", "id"]},
        ),
        migrations.CreateModel(
            name="PurchaseOrderItem",
            fields=[
                _uuid_pk(),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=14)),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("total", models.DecimalField(decimal_places=2, max_digits=14)),
                (
                    "purchase_order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="procurement.purchaseorder",
                    ),
                ),
                (
                    "raw_material",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="inventory.rawmaterial",
                    ),
                ),
            ],
            options={
                "db_table": "erp_purchase_order_items",
                "ordering": ["purchase_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="VendorBill",
            fields=[
                _uuid_pk(),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending_dispatch", "Pending dispatch"),
                            ("sent_to_vendor", "Sent to vendor"),
                            ("paid", "Paid"),
                        ],
                        default="pending_dispatch",
                        max_length=20,
                    ),
                ),
                ("bill_number", models.CharField(blank=True, default="", max_length=64)),
                ("bill_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "purchase_order",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vendor_bill",
                        to="procurement.purchaseorder",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bills",
                        to="procurement.vendor",
                    ),
                ),
            ],
            options={"db_table": "erp_vendor_bills", "ordering": ["-created_at", "id"]},
        ),
    ]
