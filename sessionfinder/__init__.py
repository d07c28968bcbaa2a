"""
sessionfinder - recurring session scheduling for workshop and cut-flower bookings.
"""

__version__ = "0.1.0"
