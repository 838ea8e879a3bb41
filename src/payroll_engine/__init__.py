"""Payroll Engine package.

Turns raw attendance check-in/check-out records into per-employee payroll
results. Organized by feature modules (attendance, payroll) with a thin Flask
controller layer over pure calculation functions and small services.
"""
