"""BizFile OCR service.

Sends company registry extracts (BizFile PDFs) to Azure document
analysis and turns the recognized text and tables into a structured
company record: identity fields, officers, shareholders, share capital
and registered charges.
"""

__version__ = "1.0.0"
