"""Volunteer hour tracking service."""
