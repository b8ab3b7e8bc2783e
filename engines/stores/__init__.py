"""
ERP Stores Engine
=================
Sales areas and the retail stores orders are placed for.
"""
