"""
jsv: validate CSV records against a JSON object schema.

Each text cell is coerced into a typed value according to the schema's
declared field types, and the assembled record is checked with a JSON Schema
validator.
"""

from importlib.metadata import version

__version__ = version("jsv")

__all__ = ["__version__"]
