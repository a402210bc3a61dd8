"""Durable ContactStore adapters."""
