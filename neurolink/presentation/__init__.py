"""
Presentation adapters

Console dashboard and chart export built on top of BCISession.
"""

from .dashboard import ConsoleDashboard, format_status_line
from .charts import save_trend_chart

__all__ = ['ConsoleDashboard', 'format_status_line', 'save_trend_chart']
