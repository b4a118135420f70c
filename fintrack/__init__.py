"""
Finance Tracker - Source Package

A small form-driven tracker for income and expense transactions,
with an admin area for categories, employees and contractors.

DESIGN PRINCIPLES:
1. The remote data gateway owns all persisted state
2. View state is disposable and always reloaded after a write
3. Failed writes leave the form exactly as it was
4. Storage backend is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
