"""
AAROHAN

Eligibility checking for the PM Internship Scheme, internship recommendations
and an AI career assistant backed by MongoDB.
"""

__version__ = "1.0.0"
__author__ = "AAROHAN Team"
__description__ = "PM Internship Scheme eligibility and career guidance service"
