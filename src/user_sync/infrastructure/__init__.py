"""
Infrastructure Layer
=====================

Low-level technical concerns:
- Database engine construction
"""
