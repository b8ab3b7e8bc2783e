"""
ERP Inventory Engine
====================
Raw materials and their append-only stock movement ledger.
"""
