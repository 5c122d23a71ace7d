"""Timecard package.

Organized by feature modules (punches, shifts, attendance, ...) with a thin
Flask controller layer over service/repository layers.
"""
