"""
Test suite for the automation API.

This package contains:
- unit/: client, decoder, config and stub tests with no live server
- integration/: CRUD, validation and token scenarios over HTTP
- security/: invalid-token authorization scenarios
- smoke/: critical-path lifecycle checks
"""
