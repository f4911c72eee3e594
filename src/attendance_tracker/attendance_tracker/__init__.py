"""Attendance Tracker package.

Feature modules (users, attendance, dashboard) each carry a thin Flask
controller layer on top of service and repository layers.
"""
