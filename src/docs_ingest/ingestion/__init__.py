"""
Ingestion — directory walking, text extraction, chunking, and indexing.

This module holds the four sequential stages that turn a tree of markup
files into an embedded similarity index on disk.
"""
