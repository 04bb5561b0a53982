"""
Refocus Pet - Cognition
Needs and behavior selection.
"""
