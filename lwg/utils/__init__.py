"""Shared helpers for lwg."""
