"""
Core utilities: domain errors and the peer id anonymizer.
"""
