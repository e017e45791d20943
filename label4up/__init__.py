"""
Convert scanned shipping-label PDFs into 4-up A4 print sheets.
"""
