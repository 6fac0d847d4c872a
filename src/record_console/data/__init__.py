"""
Static and demo data for the Record Console.

This package contains fixture records used by DemoRecordService for
development, testing, and demonstrations without a backend.

Modules:
- demo_records: Lead and unit records with realistic values
"""
