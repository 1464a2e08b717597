"""Committee Attendance package.

Feature modules (members, teams, events, attendance) each carry a model,
a repository interface with its MySQL implementation, a service layer and a
thin Flask controller.
"""
