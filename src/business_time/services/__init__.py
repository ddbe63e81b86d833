"""
Services Layer.

Business logic orchestration:
- Business date calculation
"""

from business_time.services.calculator import (
    BusinessDateCalculator,
    calculate_business_date,
)


__all__ = [
    "BusinessDateCalculator",
    "calculate_business_date",
]
