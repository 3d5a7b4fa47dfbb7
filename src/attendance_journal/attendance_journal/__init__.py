"""Attendance Journal package.

This package is organized by feature modules (users, students, attendance)
over a pluggable key-value storage layer, with a thin Flask controller layer
and service/repository layers.
"""
