"""Studio Portal package.

This package is organized by feature modules (users, projects, tasks, ...)
with a thin Flask controller layer over service/repository layers that talk
to the project-management REST backend.
"""
