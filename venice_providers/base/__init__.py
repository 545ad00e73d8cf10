"""Shared base layer used by the Venice adapter."""
