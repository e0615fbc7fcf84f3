"""Core application components.

This module provides the foundational components for the authorization API:
- Database connection management via Prisma
- Application settings and configuration
- Logging configuration with JSON output for audit pipelines
"""
