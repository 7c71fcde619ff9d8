from .clock import Clock, fixed_clock, system_clock
from .logging import JsonFormatter, configure_logging

__all__ = [
     "Clock",
     "fixed_clock",
     "system_clock",
     "JsonFormatter",
     "configure_logging",
]
