"""API-specific request/response models.

Domain models live in quotation.models and are converted here into plain
response shapes.

Modules:
- common: Error wrappers and validation error formatting
- pricing: Live pricing request and response
- stays: Stay listing and catalog responses
- quotes: Quote responses and status update request
- age_ranges: Age range administration
"""

__all__: list[str] = []
