"""
Glacier Gateway
"""
