"""
VecDoc: document expiry alerts and maintenance reminders backend.
"""
