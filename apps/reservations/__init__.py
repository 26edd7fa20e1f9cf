"""Reservations app package.

Guests reserve approved offices for date ranges. Creation runs under a
per-office distributed lock so that no two active reservations of one
office overlap, and the price is computed once when the reservation is
made.
"""
