"""
ERP Orders Engine
=================
Store orders and their status state machine.
"""
