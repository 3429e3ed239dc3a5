"""
User Sync
=========

One-shot ETL: read the users table, map each row to the canonical user
contract, and deliver the batch to a third-party API.
"""

__version__ = "1.0.0"
