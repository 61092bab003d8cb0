"""Outbound messaging channels."""
