"""
Report generation for CivicPulse.

Deterministic narrative assembly, the optional Gemini generator,
fallback selection, and the daily sentiment trend table.
"""
