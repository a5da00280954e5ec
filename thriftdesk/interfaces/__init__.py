"""Delivery interfaces."""
