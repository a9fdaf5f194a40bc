"""
Utility modules for CivicPulse.

Cross-cutting concerns:
- Storage: File I/O helpers for data persistence
"""
