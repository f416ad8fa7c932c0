"""
Command-line interface for vsa-calculator.
"""
