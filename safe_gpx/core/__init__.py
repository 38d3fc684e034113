"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants for the GPX vocabulary and defaults
- exceptions: Exception hierarchy shared by every stage
"""
