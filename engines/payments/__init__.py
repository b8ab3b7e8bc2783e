"""
ERP Payments Engine
===================
Payment collection against invoices and invoice balance reconciliation.
"""
