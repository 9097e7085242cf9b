"""
Session service for the session access layer.
"""
