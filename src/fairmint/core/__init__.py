# fairmint/core/__init__.py
"""
Core components for fairmint.

- economics: emission schedule engine (normalize, generate, validate, report)
"""
