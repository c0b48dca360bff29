"""
BizDesk - invoicing, client records and enquiries API.

Run with:
    uvicorn bizdesk.main:app --reload
"""

__version__ = "1.0.0"
