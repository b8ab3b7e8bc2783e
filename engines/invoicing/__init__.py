"""
ERP Invoicing Engine
====================
Turns approved orders into tax invoices.
"""
