"""Staff Portal package.

This package is organized by feature modules (users, employees, attendance,
leaves, approvals) with a thin Flask controller layer over service/repository
layers.
"""
