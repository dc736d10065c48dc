"""
slotbooker - find bookable appointment slots for a single business day.
"""

__version__ = "0.1.0"
