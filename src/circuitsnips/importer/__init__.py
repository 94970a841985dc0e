"""Batch import of circuits scraped from public repositories."""
