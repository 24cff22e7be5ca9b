"""
Clinic document engine.

Package layout:
- models/   Invoice input records, field entries, layout records
- layout/   Text wrapping, page canvas, invoice and medical-form renderers
- forms/    Widget probing and filling for arbitrary PDFs
- export/   Flattening, text inspection, printing
- config/   Layout profile (branding, footer, formats)
"""

__version__ = "0.1.0"
