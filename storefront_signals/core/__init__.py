"""Core building blocks shared across the package."""
