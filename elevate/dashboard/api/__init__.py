"""
API роутеры Elevate Dashboard
"""

from . import habits, charts

__all__ = ['habits', 'charts']
