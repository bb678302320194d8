"""plansync: building plan extraction and Airtable sync pipeline."""

__version__ = "0.1.0"
