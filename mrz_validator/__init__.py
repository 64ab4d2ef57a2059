"""
MRZ Validator — Paranoid validation for OCR-extracted Machine-Readable Zones.

Architecture: Normalize → Classify → Extract → Checksum (ICAO 9303) → Fraud scoring
Philosophy:  Never raise on bad input. Every problem is reported as data.
"""

__version__ = "1.0.0"
