"""Adapters – optional integrations; import the sub-package you need."""
