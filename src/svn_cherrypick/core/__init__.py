"""Parsing, selection and svn plumbing."""
