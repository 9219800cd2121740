"""Utilities for text, price, and URL normalization and HTTP retries."""
