"""Payload Tracker package.

Delivery drivers log their daily or per-item work with photo proof, the
payroll module prices it against a fixed rate table, and admins review and
export every driver's records. Organized by feature modules (users, records,
payroll, reporting) behind a thin Flask controller layer.
"""
