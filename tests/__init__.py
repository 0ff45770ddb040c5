"""
Quote Me Test Suite
===================

This package contains tests for Quote Me including:
- Unit tests for the quote store, utilities, API and CLI
- Integration tests for complete command-line workflows
"""
