"""Seedr HTTP transport, wire models and device authentication."""
