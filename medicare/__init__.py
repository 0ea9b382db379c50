# medicare/__init__.py
"""MediCare Network client: senior and caregiver views over the adherence API."""

__version__ = "0.1.0"
