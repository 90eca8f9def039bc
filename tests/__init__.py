"""Test suite for formbind.

This package contains tests for:
- Value construction, equality and lenient accessors
- Strict coercion rules per target kind
- Validator families
- ErrorCollection merge and append semantics
- Field, Fieldset and Form validation
- JSON Schema translation
- Whole-submission scenarios (validate, redisplay, bind)
"""
