"""Workflows behind the HTTP routes: verification, registration and sessions."""
