"""
ERP Identity
============
Users of the system: administrators and sales captains.
"""
