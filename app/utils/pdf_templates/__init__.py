"""
PDF report templates.
"""
from .base_report import BaseReport
from .dispatch_report import OrderDispatchReport

__all__ = ['BaseReport', 'OrderDispatchReport']
