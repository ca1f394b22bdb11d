"""
Reference data shipped with the service
"""

from .opportunities import SAMPLE_OPPORTUNITIES

__all__ = ["SAMPLE_OPPORTUNITIES"]
