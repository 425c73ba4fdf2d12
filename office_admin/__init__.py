"""Office administration backend: offices, working hours, time slots and job positions"""

__version__ = "1.0.0"
