"""
Shared Kernel Module
====================

Generic infrastructure shared by every part of the sync pipeline.

DO NOT add sync business logic to the shared kernel.
"""
