"""Bookings app package.

This app holds the booking records that the availability computation reads.
Creating, paying for and confirming bookings is handled by a separate
booking service; here bookings are only stored and inspected.
"""
