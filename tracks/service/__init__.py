"""
Service layer for the fetch-decode-cache pipeline.

This module contains reusable functions for downloading and decoding audio,
independent of the database/Django models. These functions are used by:
- The /process endpoint (tracks/views.py via tracks/operations.py)
- The CLI management command (management/commands/fetch.py)
"""
