"""Campus Learning Dashboard backend.

Organized by feature modules (users, mentor_requests, mentors, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
