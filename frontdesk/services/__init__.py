"""
High-level use cases for the front desk.

RosterStore orchestrates the storage adapters to implement check-in and
check-out; view_service derives what the presentation layer displays.
Presentation code should call these instead of touching storage directly.
"""
