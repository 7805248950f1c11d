"""Unified command-line interface for the myprice project.

Usage:
    myprice parse <ocr_json>
    myprice parse <ocr_json> --json --save
    myprice serve [--host] [--port]
"""
