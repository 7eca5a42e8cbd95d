"""REST API for stay quotation."""
