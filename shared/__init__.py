"""Helpers shared by the automation API test suites."""
