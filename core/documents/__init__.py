"""
ERP Documents
=============
Business document numbering: orders, invoices, payments, purchase orders.
"""
