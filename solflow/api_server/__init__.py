"""
Read-only HTTP API exposing wallet flow analysis to a rendering layer.
"""
