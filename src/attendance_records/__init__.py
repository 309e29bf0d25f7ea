"""Attendance Records package.

Check-in/check-out record store backed by MongoDB, organized as a service and
repository layer with a thin Flask controller on top.
"""
