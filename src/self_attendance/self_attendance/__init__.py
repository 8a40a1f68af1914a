"""Self Attendance package.

Personal attendance tracker organized by feature modules (attendance, users,
storage, ...) with a thin Flask controller layer over service and repository
layers.
"""
