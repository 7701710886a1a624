"""Utility helpers for appgather (configuration, logging, JSON)."""
