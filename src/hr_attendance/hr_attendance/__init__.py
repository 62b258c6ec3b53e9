"""HR attendance engine package.

Organized by feature modules (attendance, exemptions, holidays, schedules,
users) with a thin Flask controller layer over service/repository layers.
"""
