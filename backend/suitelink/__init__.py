"""Signed, resilient client for NetSuite RESTlet endpoints."""
