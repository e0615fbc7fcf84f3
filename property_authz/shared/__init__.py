"""Shared utilities and cross-domain components.

This module contains utilities used across multiple domains:
- HTTP exception classes for consistent error responses
- The authorization core (statements, roles, evaluator, gate)
"""
