"""
Refocus Pet - Shared
Constants and record types used by the brain and the emulator.
"""
