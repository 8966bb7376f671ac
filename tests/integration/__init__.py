"""
Scenario tests for the automation API.

Tests run over real HTTP against the stub or a live host and demonstrate:
- CRUD operation testing for both resources
- Input validation testing
- Token acquisition testing
"""
