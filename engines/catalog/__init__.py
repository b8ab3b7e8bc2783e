"""
ERP Catalog Engine
==================
Finished products sold to stores.
"""
