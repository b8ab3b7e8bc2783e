"""
ERP Procurement Engine
======================
Vendors, purchase orders, receiving into the raw-material ledger, and
the vendor bills raised on receipt.
"""
