"""Shared building blocks: errors, logging, result types, constants and models."""
