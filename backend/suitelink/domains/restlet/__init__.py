"""NetSuite RESTlet integration: OAuth 1.0a signing, resilient calls, typed actions."""
