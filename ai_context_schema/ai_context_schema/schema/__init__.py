"""Bundled JSON Schema definitions, one directory per format version.

The definitions are data files; they are loaded through
``ai_context_schema.models.json_schema_loader``.
"""
