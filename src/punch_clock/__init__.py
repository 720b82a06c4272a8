"""Punch Clock package.

Feature modules (users, schedules, time_entries) each carry a domain model,
a repository interface with its MySQL implementation, a service layer and a
thin Flask controller.
"""
