"""
ERP Production Engine
=====================
Production suggestions and their progress.
"""
