"""
Framework integrations for policy checks.
"""
