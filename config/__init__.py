"""
Configuration for CivicPulse.
"""
