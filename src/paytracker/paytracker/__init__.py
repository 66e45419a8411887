"""PayTracker package.

Multi-tenant attendance and payroll application organized by feature modules
(companies, employees, attendance, payroll, loans, ...) with a thin Flask
controller layer over service/repository layers.
"""
