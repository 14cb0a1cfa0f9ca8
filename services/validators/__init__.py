"""
Chilean validators service

Pure input-validation helpers with:
- RUT cleaning, módulo 11 validation and formatting
- Level-based password rules
- Minutely two-factor code generation
- Pydantic settings and structured JSON logging for the CLI
"""

__version__ = "0.1.0"
