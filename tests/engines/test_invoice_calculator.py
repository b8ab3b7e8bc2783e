"""
Tests for engines.invoicing.calculator — pure GST invoice arithmetic.
"""

from decimal import Decimal

import pytest

from engines.invoicing.calculator import (
    InvoiceLineInput,
    compute_invoice,
    compute_line,
    hsn_summary,
    split_gst,
)


def _line(quantity=10, price="100", discount="10", gst="18", product_id="p1"):
    return InvoiceLineInput(
        product_id=product_id,
        quantity=quantity,
        price=Decimal(price),
        discount_percent=Decimal(discount),
        gst_percent=Decimal(gst),
    )


class TestComputeLine:
    def test_discount_applies_before_gst(self):
        amounts = compute_line(_line())
        assert amounts.line_subtotal == Decimal("1000.00")
        assert amounts.discount_amount == Decimal("100.00")
        assert amounts.taxable_amount == Decimal("900.00")
        assert amounts.gst_amount == Decimal("162.00")
        assert amounts.total == Decimal("1062.00")
        assert amounts.unit_price == Decimal("90.00")
        assert amounts.list_price == Decimal("100.00")

    def test_zero_discount(self):
        amounts = compute_line(_line(quantity=3, price="45.50", discount="0", gst="5"))
        assert amounts.taxable_amount == Decimal("136.50")
        assert amounts.gst_amount == Decimal("6.83")
        assert amounts.total == Decimal("143.33")

    def test_half_up_rounding_per_line(self):
        amounts = compute_line(_line(quantity=1, price="0.05", discount="50", gst="0"))
        assert amounts.discount_amount == Decimal("0.03")
        assert amounts.taxable_amount == Decimal("0.02")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"quantity": 0},
            {"price": "-1"},
            {"discount": "101"},
            {"gst": "-5"},
        ],
    )
    def test_rejects_invalid_input(self, kwargs):
        with pytest.raises(ValueError):
            _line(**kwargs)

    def test_rejects_float_price(self):
        with pytest.raises(ValueError):
            InvoiceLineInput(
                product_id="p1",
                quantity=1,
                price=10.0,
                discount_percent=Decimal("0"),
                gst_percent=Decimal("18"),
            )


class TestComputeInvoice:
    def test_totals_equal_sum_of_rounded_lines(self):
        totals = compute_invoice(
            [
                _line(quantity=7, price="33.33", discount="7.5", gst="12", product_id="a"),
                _line(quantity=3, price="19.99", discount="7.5", gst="5", product_id="b"),
            ]
        )
        assert totals.total_amount == sum(line.total for line in totals.lines)
        assert totals.total_amount == (
            totals.subtotal - totals.discount_amount + totals.gst_amount
        )

    def test_empty_invoice_is_rejected(self):
        with pytest.raises(ValueError):
            compute_invoice([])


class TestGstSplit:
    def test_even_split(self):
        assert split_gst(Decimal("162.00")) == (Decimal("81.00"), Decimal("81.00"))

    def test_odd_paisa_goes_to_sgst(self):
        assert split_gst(Decimal("6.83")) == (Decimal("3.42"), Decimal("3.41"))

    def test_hsn_summary_groups_by_code_and_rate(self):
        summary = hsn_summary(
            [
                ("0910", Decimal("18"), Decimal("900.00"), Decimal("162.00")),
                ("0910", Decimal("18"), Decimal("100.00"), Decimal("18.00")),
                ("0910", Decimal("5"), Decimal("136.50"), Decimal("6.83")),
                ("", Decimal("0"), Decimal("10.00"), Decimal("0.00")),
            ]
        )
        assert [(row["hsn_code"], row["gst_percent"]) for row in summary] == [
            ("", Decimal("0")),
            ("0910", Decimal("5")),
            ("0910", Decimal("18")),
        ]
        eighteen = summary[2]
        assert eighteen["taxable_amount"] == Decimal("1000.00")
        assert eighteen["cgst_amount"] == Decimal("90.00")
        assert eighteen["sgst_amount"] == Decimal("90.00")
