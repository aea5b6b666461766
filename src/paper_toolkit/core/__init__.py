"""
Core Package

Data models, schemas and serialization shared across the toolkit.
"""
