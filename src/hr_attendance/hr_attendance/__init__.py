"""HR attendance package.

Organized by feature modules (attendance, employees, reports, leave) with a
thin Flask controller layer over service/repository layers.
"""
