"""
TentDesk Booking - Public API
=============================
"""

from tentdesk.booking.forms import BookingForm
from tentdesk.booking.workflow import BookingResult, BookingWorkflow

__all__ = [
    "BookingForm",
    "BookingResult",
    "BookingWorkflow",
]
